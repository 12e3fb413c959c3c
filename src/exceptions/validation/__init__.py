from src.exceptions.validation.input_validation_error import InputValidationError

__all__ = ["InputValidationError"]
