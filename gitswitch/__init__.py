"""
gitswitch - keep several git identities and switch between them.
"""

__version__ = "0.2.0"
