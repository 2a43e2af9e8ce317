"""Trade history, fair market value and price charts for NationStates cards."""

__version__ = "0.1.0"
