from infrastructure.drivers.static_driver import StaticPageDriver

__all__ = ["StaticPageDriver"]
