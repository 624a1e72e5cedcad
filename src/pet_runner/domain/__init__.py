from .literals import LiteralScalar, LiteralValue, MalformedLiteral, coerce_literal

__all__ = ["LiteralScalar", "LiteralValue", "MalformedLiteral", "coerce_literal"]
