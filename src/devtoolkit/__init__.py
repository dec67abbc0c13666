"""devtoolkit: detect, verify, and install developer tools by category."""

__version__ = "0.1.0"
