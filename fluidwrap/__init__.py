"""
fluidwrap — build rules for FLTK Fluid user-interface files.
"""

__version__ = "0.1.0"
