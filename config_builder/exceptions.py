"""
Custom exceptions for config-builder with helpful error messages.
"""


class ConfigBuilderError(Exception):
    """Base exception for config-builder errors."""

    def __init__(self, message: str, suggestion: str = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.message)

    def __str__(self):
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class ModelError(ConfigBuilderError):
    """Errors raised while populating or rendering a model."""

    pass


class UnknownAttributeError(ModelError):
    """An input key has no registered setter on the target model."""

    def __init__(self, attribute: str, model: type, known: list[str] = None):
        self.attribute = attribute
        self.model = model
        message = f"attribute {attribute} undefined on {model.__name__}"

        suggestion = None
        if known:
            attribute_list = "\n  - ".join(known)
            suggestion = (
                f"{model.__name__} accepts the following attributes:\n  - {attribute_list}\n\n"
                "Check the descriptor for typos or misplaced keys."
            )
        super().__init__(message, suggestion)


class InvalidAttributesError(ModelError):
    """Model attributes were not given as a mapping."""

    def __init__(self, model: type | str, value: object):
        self.model = model
        owner = model if isinstance(model, str) else model.__name__
        message = f"attributes for {owner} must be a mapping, got {type(value).__name__}"
        suggestion = (
            "Model attributes are written as key/value pairs, for example:\n"
            "  - name: web\n"
            "    box: ubuntu/jammy64"
        )
        super().__init__(message, suggestion)


class InvalidAttributeValueError(ModelError):
    """A setter rejected the value given for its attribute."""

    def __init__(self, attribute: str, model: type, reason: str):
        self.attribute = attribute
        self.model = model
        message = f"invalid value for {model.__name__}.{attribute}: {reason}"
        super().__init__(message)


class IncompleteModelError(ModelError):
    """A model is missing an attribute it needs to produce its action."""

    def __init__(self, model: type, missing: list[str]):
        self.model = model
        self.missing = missing
        missing_list = ", ".join(missing)
        message = f"{model.__name__} is missing required attribute(s): {missing_list}"
        suggestion = f"Add {missing_list} to the {model.__name__} entry in the descriptor."
        super().__init__(message, suggestion)


class ModelCollectionError(ConfigBuilderError):
    """Errors related to model type registries."""

    pass


class UnknownModelTypeError(ModelCollectionError):
    """No model is registered under the requested type name."""

    def __init__(self, category: str, type_name: str, known: list[str] = None):
        self.category = category
        self.type_name = type_name
        message = f"Unknown {category} type: {type_name}"

        if known:
            type_list = "\n  - ".join(known)
            suggestion = f"Known {category} types:\n  - {type_list}"
        else:
            suggestion = f"No {category} types are registered."
        super().__init__(message, suggestion)


class MissingModelTypeError(ModelCollectionError):
    """A collection entry does not say which model type it is."""

    def __init__(self, category: str):
        self.category = category
        message = f"{category} entry has no 'type' key"
        suggestion = (
            f"Every {category} entry must name its type, for example:\n"
            f"  {category}s:\n"
            f"    - type: <name>"
        )
        super().__init__(message, suggestion)


class DuplicateModelTypeError(ModelCollectionError):
    """A type name was registered twice in the same collection."""

    def __init__(self, category: str, type_name: str):
        self.category = category
        self.type_name = type_name
        message = f"{category} type '{type_name}' is already registered"
        super().__init__(message)


class DescriptorError(ConfigBuilderError):
    """Errors related to descriptor files."""

    pass


class DescriptorNotFoundError(DescriptorError):
    """Descriptor file not found."""

    def __init__(self, path: str = None):
        message = "No descriptor files given."
        if path:
            message = f"Descriptor file not found: {path}"

        suggestion = (
            "Pass descriptor files on the command line:\n"
            "  config-builder plan vms.yaml\n\n"
            "Or set CONFIG_BUILDER_DESCRIPTOR to a list of files."
        )
        super().__init__(message, suggestion)


class DescriptorParseError(DescriptorError):
    """Descriptor file is not valid YAML."""

    def __init__(self, path: str, error_details: str):
        self.path = path
        message = f"Failed to parse descriptor {path}: {error_details}"
        suggestion = "Check the YAML syntax of the descriptor (indentation, quoting, colons)."
        super().__init__(message, suggestion)


class DescriptorValidationError(DescriptorError):
    """Descriptor content failed validation."""

    def __init__(self, errors: list[str], path: str = None, suggestion: str = None):
        self.errors = errors
        self.path = path
        error_list = "\n  - ".join(errors)
        message = f"Descriptor validation failed with {len(errors)} error(s):\n  - {error_list}"

        if path:
            message = f"Descriptor validation failed for {path}:\n  - {error_list}"

        default_suggestion = (
            "Fix the validation errors in your descriptor.\n"
            "List the attributes each model accepts with:\n"
            "  config-builder models"
        )
        if suggestion:
            suggestion = f"{suggestion}\n\n{default_suggestion}"
        else:
            suggestion = default_suggestion
        super().__init__(message, suggestion)


def format_error_for_cli(error: Exception) -> str:
    """
    Format an exception for CLI display with helpful information.

    Args:
        error: The exception to format

    Returns:
        Formatted error message string
    """
    if isinstance(error, ConfigBuilderError):
        output = f"[red]Error:[/red] {error.message}"
        if error.suggestion:
            output += f"\n\n[yellow]{error.suggestion}[/yellow]"
        return output
    else:
        return f"[red]Error:[/red] {str(error)}"
