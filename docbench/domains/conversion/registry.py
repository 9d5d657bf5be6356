"""
Converter Registry - Named converter strategies per conversion direction.

Features:
- Registration keyed by (direction, strategy name), in registration order
- "default" fallback when a requested strategy is missing
- Plugin loading from ``module:function`` strings and entry points
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable
from importlib.metadata import entry_points

from docbench.config.errors import ConfigurationError, ErrorCode

from .contracts import Converter
from .models import ConversionType

logger = logging.getLogger(__name__)

__all__ = ["ConverterRegistry", "DEFAULT_STRATEGY", "ENTRY_POINT_GROUP"]

DEFAULT_STRATEGY = "default"
ENTRY_POINT_GROUP = "docbench.converters"


class ConverterRegistry:
    """
    Registry of converter strategies.

    Example:
        >>> registry = ConverterRegistry()
        >>> registry.register(ConversionType.PDF_TO_DOCX, "default", my_converter)
        >>> converter = registry.resolve(ConversionType.PDF_TO_DOCX, "missing")
        >>> converter is my_converter
        True
    """

    def __init__(self) -> None:
        self._converters: dict[ConversionType, dict[str, Converter]] = {
            conversion_type: {} for conversion_type in ConversionType
        }

    def register(
        self,
        conversion_type: ConversionType | str,
        strategy_name: str,
        converter: Converter,
    ) -> None:
        """
        Register a converter, replacing any previous one with the same name.

        Args:
            conversion_type: Direction the converter handles
            strategy_name: Name used in results and reports
            converter: Sync or async converter callable
        """
        if not callable(converter):
            raise ConfigurationError(
                f"Converter {strategy_name!r} is not callable",
                code=ErrorCode.CONFIG_INVALID_PLUGIN,
            )
        conversion_type = ConversionType(conversion_type)
        self._converters[conversion_type][strategy_name] = converter
        logger.debug("Registered converter %s for %s", strategy_name, conversion_type.value)

    def resolve(
        self,
        conversion_type: ConversionType | str,
        strategy_name: str | None = None,
    ) -> Converter:
        """
        Look up a converter, falling back to the default strategy.

        Raises:
            ConfigurationError: If neither the named nor a default converter exists
        """
        conversion_type = ConversionType(conversion_type)
        converters = self._converters[conversion_type]

        if strategy_name and strategy_name in converters:
            return converters[strategy_name]
        if DEFAULT_STRATEGY in converters:
            if strategy_name and strategy_name != DEFAULT_STRATEGY:
                logger.info(
                    "Converter %s not registered for %s, using default",
                    strategy_name,
                    conversion_type.value,
                )
            return converters[DEFAULT_STRATEGY]

        raise ConfigurationError(
            f"No default converter registered for {conversion_type.value}",
            details={"conversion_type": conversion_type.value, "strategy": strategy_name},
            code=ErrorCode.CONFIG_NO_DEFAULT_CONVERTER,
        )

    def strategies(self, conversion_type: ConversionType | str) -> list[tuple[str, Converter]]:
        """
        Strategies to compare, in registration order.

        The default entry is skipped when it is an alias for another
        registered strategy, so one converter is never run twice.
        """
        converters = self._converters[ConversionType(conversion_type)]
        named = [(name, fn) for name, fn in converters.items() if name != DEFAULT_STRATEGY]

        default = converters.get(DEFAULT_STRATEGY)
        if default is None or any(fn is default for _, fn in named):
            return named

        return list(converters.items())

    def names(self, conversion_type: ConversionType | str) -> list[str]:
        return list(self._converters[ConversionType(conversion_type)])

    def __len__(self) -> int:
        return sum(len(converters) for converters in self._converters.values())

    def load_plugin(self, target: str) -> None:
        """
        Import ``module:function`` and call it with this registry.

        Raises:
            ConfigurationError: If the target cannot be imported or called
        """
        module_name, _, attribute = target.partition(":")
        if not module_name or not attribute:
            raise ConfigurationError(
                f"Plugin must look like 'module:function', got {target!r}",
                code=ErrorCode.CONFIG_INVALID_PLUGIN,
            )
        try:
            module = importlib.import_module(module_name)
            hook = getattr(module, attribute)
        except (ImportError, AttributeError) as e:
            raise ConfigurationError(
                f"Cannot load plugin {target!r}: {e}",
                details={"plugin": target},
                code=ErrorCode.CONFIG_INVALID_PLUGIN,
            ) from e

        if not callable(hook):
            raise ConfigurationError(
                f"Plugin {target!r} is not callable",
                details={"plugin": target},
                code=ErrorCode.CONFIG_INVALID_PLUGIN,
            )

        hook(self)
        logger.info("Loaded converter plugin %s", target)

    def load_plugins(self, targets: Iterable[str]) -> None:
        for target in targets:
            self.load_plugin(target)

    def load_entry_points(self, group: str = ENTRY_POINT_GROUP) -> int:
        """
        Call every installed entry point in ``group`` with this registry.

        Returns:
            Number of entry points loaded

        Raises:
            ConfigurationError: If an entry point cannot be imported or called
        """
        loaded = 0
        for entry_point in entry_points(group=group):
            try:
                hook = entry_point.load()
            except (ImportError, AttributeError) as e:
                raise ConfigurationError(
                    f"Cannot load entry point {entry_point.name!r}: {e}",
                    details={"entry_point": entry_point.name, "value": entry_point.value},
                    code=ErrorCode.CONFIG_INVALID_PLUGIN,
                ) from e

            if not callable(hook):
                raise ConfigurationError(
                    f"Entry point {entry_point.name!r} is not callable",
                    details={"entry_point": entry_point.name, "value": entry_point.value},
                    code=ErrorCode.CONFIG_INVALID_PLUGIN,
                )

            hook(self)
            loaded += 1
            logger.info("Loaded converter entry point %s", entry_point.name)
        return loaded
