from tfimporter.testing.fake_adapter import FakeAdapter, client_error

__all__ = ["FakeAdapter", "client_error"]
