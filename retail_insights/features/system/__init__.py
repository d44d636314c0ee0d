from .routes import system_bp, debug_bp

__all__ = ['system_bp', 'debug_bp']
