"""CLI tools for hookhub"""
__all__ = ["app"]


def __getattr__(name):
    if name == "app":
        from hookhub.cli.main import app
        return app
    raise AttributeError(f"module {__name__} has no attribute {name}")
