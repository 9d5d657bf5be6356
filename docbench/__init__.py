"""
DocBench - Conversion quality benchmarking and comparison engine.

Example:
    >>> from docbench.domains.conversion import ConverterRegistry, ConversionType
    >>> from docbench.domains.orchestration import ConversionPipeline
    >>> registry = ConverterRegistry()
    >>> registry.register(ConversionType.PDF_TO_DOCX, "default", my_converter)
    >>> comparison = await ConversionPipeline(registry).compare_converters("sample.pdf")
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
