class MetabridgeError(Exception):
    pass


class BackendUnavailableError(MetabridgeError):
    def __init__(self, preferred: str, wine_available: bool, vm_available: bool) -> None:
        self.preferred = preferred
        self.wine_available = wine_available
        self.vm_available = vm_available
        super().__init__(
            "No backend available to run Windows executables "
            f"(preferred={preferred}, wine={'found' if wine_available else 'missing'}, "
            f"parallels={'found' if vm_available else 'missing'})"
        )


class CommandFailedError(MetabridgeError):
    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed (exit {returncode}): {command}")
