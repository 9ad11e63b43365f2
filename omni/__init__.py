"""
omni - event dispatch and routing core for the chat gateway.
"""

__version__ = "0.1.0"
__logo__ = "◎"
