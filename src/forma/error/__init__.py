from forma import config, logger


DEBUG_APP_EXCEPTION = config.DEBUG_APP_EXCEPTION


class FormaException(Exception):
    status_code = 500
    label = "Internal Error"
    errcode = "F00.000"

    def __init__(self, errcode, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.errcode = errcode

        DEBUG_APP_EXCEPTION and logger.exception(message)

    def __str__(self):
        if self.details is None:
            return f"{self.errcode} [{self.status_code}] >> {self.message}"

        return f"{self.errcode} [{self.status_code}] >> {self.message} >> {self.details}"

    @property
    def content(self):
        if not self.details:
            return {"errcode": self.errcode, "message": self.message}

        return {"errcode": self.errcode, "message": self.message, "details": self.details}


class BadRequestError(FormaException):
    label = "Bad Request"
    status_code = 400
    errcode = "F00.400"


class NotFoundError(FormaException):
    label = "Not Found"
    status_code = 404
    errcode = "F00.404"


class InternalServerError(FormaException):
    label = "Internal Server Error"
    status_code = 500
    errcode = "F00.500"


class DefinitionError(InternalServerError):
    label = "Invalid Form Definition"
    errcode = "F10.500"


class OwnerChainError(FormaException, AttributeError):
    ''' No node of an owner chain provides the requested capability. '''
    label = "Unresolved Capability"
    status_code = 500
    errcode = "F20.404"
