""" Exceptions raised while mirroring a bucket. """


class MirrorError(Exception):
    """ Base class for every failure that aborts a mirror run. """


class ConfigError(MirrorError):
    """ Raised when required configuration is missing or malformed. """


class ListError(MirrorError):
    """ Raised when the bucket listing cannot be retrieved. """

    def __init__(self, message, bucket=None):
        self.bucket = bucket
        super().__init__(message)


class DirectoryCreateError(MirrorError):
    """ Raised when a local directory cannot be created. """

    def __init__(self, message, path=None, key=None):
        self.path = path
        self.key = key
        super().__init__(message)


class FetchError(MirrorError):
    """ Raised when an object's content cannot be retrieved. """

    def __init__(self, message, key=None):
        self.key = key
        super().__init__(message)


class WriteError(MirrorError):
    """ Raised when fetched content cannot be written to disk. """

    def __init__(self, message, key=None, path=None):
        self.key = key
        self.path = path
        super().__init__(message)
