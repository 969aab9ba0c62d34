class SolupdateException(Exception):
    pass


class UnsupportedCommandKind(SolupdateException):
    def __init__(self, kind):
        self.kind = kind
        super(UnsupportedCommandKind, self).__init__(f"Unsupported command type {kind!r}")


class ConfigException(SolupdateException):
    pass


class LoadException(SolupdateException):
    pass
