# This file is imported from __init__.py and parsed by setup.py

__version__ = "0.1.0+dev"
