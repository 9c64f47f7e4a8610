from .bar import Bar, ModeSelectorWidget

__all__ = ["Bar", "ModeSelectorWidget"]
