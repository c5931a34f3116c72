"""
Fatal errors raised by the generator.

Every exception here aborts the whole generation run. Recoverable situations
(classes that are not models, the User model, scopes that cannot be resolved)
are logged and skipped by the pipeline instead of raising.
"""


class CodegenError(ValueError):
    """Base class for errors that abort a generation run."""


class DescriptorError(CodegenError):
    """The service descriptor could not be read or does not match the schema."""


class UnknownBaseModelError(CodegenError):
    def __init__(self, base_model, model_name: str):
        self.base_model = base_model
        self.model_name = model_name
        super().__init__(
            f'Unknown base model: "{base_model}" for model: "{model_name}"'
        )


class UnsupportedTypeError(CodegenError):
    """A property, argument or return type has no Objective-C mapping."""


class UnsupportedPropertyTypeError(UnsupportedTypeError):
    def __init__(self, type_name: str, property_name: str, model_name: str):
        self.type_name = type_name
        self.property_name = property_name
        self.model_name = model_name
        super().__init__(
            f'Unsupported property type: "{type_name}" of property: "{property_name}" '
            f'in model: "{model_name}"'
        )


class UnsupportedArgumentTypeError(UnsupportedTypeError):
    def __init__(self, type_name: str, arg_name: str, method_name: str, model_name: str):
        self.type_name = type_name
        self.arg_name = arg_name
        self.method_name = method_name
        self.model_name = model_name
        super().__init__(
            f'Unsupported argument type: "{type_name}" of argument: "{arg_name}" '
            f'in method: "{method_name}" of model: "{model_name}"'
        )


class UnsupportedReturnTypeError(UnsupportedTypeError):
    def __init__(self, type_name: str, method_name: str, model_name: str):
        self.type_name = type_name
        self.method_name = method_name
        self.model_name = model_name
        super().__init__(
            f'Unsupported return type: "{type_name}" in method: "{method_name}" '
            f'of model: "{model_name}"'
        )


class MultipleBodyArgumentsError(CodegenError):
    def __init__(self, method_name: str, model_name: str):
        self.method_name = method_name
        self.model_name = model_name
        super().__init__(
            f'Multiple body arguments specified in method: "{method_name}" '
            f'of model: "{model_name}"'
        )
