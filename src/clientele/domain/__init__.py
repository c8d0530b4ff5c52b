"""Domain layer for CLIENTELE.

Pure business types and rules: the Customer aggregate, its validator and
document codec, RFC 7396 merge patch, domain outcomes, and CloudEvent shapes.
Nothing here performs I/O.
"""

from .model import Address, Customer, Email, Phone
from .validation import FieldViolation, validate

__all__ = ["Address", "Customer", "Email", "FieldViolation", "Phone", "validate"]
