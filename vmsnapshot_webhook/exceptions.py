class BaseWebhookException(Exception):
    """
    Base exception that can take an error message and context information.
    """

    message: str
    context: dict
    status_code: int = 400
    default_message = "An error occurred."

    def __init__(self, message: str = default_message, **kwargs):
        self.message = message.format(**kwargs)
        self.context = dict(**kwargs)
        super().__init__()

    def __str__(self):
        return str(dict(message=self.message, context=self.context))

    @property
    def user_msg(self):
        return self.message

    def update_context(self, **kwargs):
        self.context.update(dict(**kwargs))


class ValidationError(BaseWebhookException):
    pass


class InvalidFormatException(ValidationError):
    pass


class InvalidSnapshotFormatError(InvalidFormatException):
    pass


class InvalidConfigurationFormatError(InvalidFormatException):
    pass


class NotFoundException(BaseWebhookException):
    pass


class ResourceNotFoundError(NotFoundException):
    pass


class UnexpectedResourceError(BaseWebhookException):
    pass


class UnexpectedOperationError(BaseWebhookException):
    pass


class UnreachableError(BaseWebhookException):
    status_code = 500


class InvalidResourceNameError(InvalidFormatException):
    pass
