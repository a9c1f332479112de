"""Smart Investment Advisor: free-text goals in, portfolio recommendations out."""

__version__ = "0.1.0"
