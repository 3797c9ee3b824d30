"""SIP / step-up / lumpsum growth and home-loan EMI calculators."""

__version__ = "0.1.0"
