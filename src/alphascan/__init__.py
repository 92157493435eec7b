"""AlphaScan - cross-venue prediction-market arbitrage and same-ticker token discovery."""

__version__ = "0.1.0"
