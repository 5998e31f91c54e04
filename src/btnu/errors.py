class BtnuError(Exception):
    """Base class for every error btnu reports to the user."""


class ConfigMissing(BtnuError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"No configuration file found at \"{path}\".")


class InvalidConfig(BtnuError):
    pass


class MissingRequiredConfig(BtnuError):
    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(
            "The following configuration values need to be set: " + ", ".join(self.fields)
        )


class UnknownGroup(BtnuError):
    def __init__(self, name, available=()):
        self.name = name
        self.available = list(available)
        message = f"Directory group \"{name}\" does not exist."
        if self.available:
            message += f" Available groups: {', '.join(self.available)}"
        super().__init__(message)


class PathNotFound(BtnuError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Path \"{path}\" does not exist.")


class HostUnreachable(BtnuError):
    def __init__(self, host):
        self.host = host
        super().__init__(f"{host} looks to be down.")


class ConflictingFlags(BtnuError):
    def __init__(self, flags):
        self.flags = list(flags)
        super().__init__(
            f"Options {' and '.join(self.flags)} cannot be combined: choose either a mirror or a regular run."
        )


class MissingDependency(BtnuError):
    def __init__(self, binary):
        self.binary = binary
        super().__init__(f"btnu requires {binary}. Please install it on your system.")


class TransferFailure(BtnuError):
    def __init__(self, path, message):
        self.path = path
        self.message = message
        super().__init__(f"Transfer of \"{path}\" failed: {message}")


class MissingRunType(BtnuError):
    def __init__(self, flags):
        self.flags = list(flags)
        super().__init__(f"{' and '.join(self.flags)} needs one of -M, -m, -R or -r.")
