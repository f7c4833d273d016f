"""Player save-data model, seeded random generation and a protocol buffer codec."""

__version__ = "0.1.0"
__all__ = ["model", "generate", "wire", "messages", "codec"]