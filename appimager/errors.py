class PackagingError(Exception):
    exit_code: int = 1

    def __init__(self, message: str):
        super().__init__(message)

class ConfigError(PackagingError):
    exit_code = 2


class ValidationError(PackagingError):
    exit_code = 3


class InvalidIconError(ValidationError):
    exit_code = 4


class MissingResourceSetError(ValidationError):
    exit_code = 5

class BuildError(PackagingError):
    exit_code = 20


class FilesystemError(BuildError):
    exit_code = 12


class DirectoryNotWritableError(FilesystemError):
    exit_code = 13


class ResourceNotFoundError(BuildError):
    exit_code = 21
