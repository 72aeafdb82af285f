from .base import (
    ErrorKind,
    DomainError,
    validation_failed,
    not_found,
    conflict,
    invalid_reference,
    internal,
    entity_not_found,
)
from .integrity_classifier import StoreErrorCode, classify_store_error
from .mapper import map_store_failure
