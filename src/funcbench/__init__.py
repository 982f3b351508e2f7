"""funcbench: compare the speed and memory cost of Python callables."""

__version__ = "0.1.0"
