from .field_validators import (
    to_uppercase,
    to_lowercase,
    require_non_empty_string,
    require_non_negative_number,
    require_date,
    require_int,
    require_choice,
    require_present,
    find_unknown_model_kwargs,
)
