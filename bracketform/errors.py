class EncodeError(Exception):
    def __init__(self, message: str):
        super().__init__(f"Encode error: {message}")


class DepthError(EncodeError):
    def __init__(self, key: str, max_depth: int):
        super().__init__(f"{key} is nested deeper than {max_depth} levels")


class CycleError(EncodeError):
    def __init__(self, key: str):
        super().__init__(f"{key} refers back to one of its own containers")


class EscapeError(EncodeError):
    def __init__(self, text: str):
        super().__init__(f"Cannot percent-encode {text!r}")


class ConfigError(Exception):
    def __init__(self, message: str):
        super().__init__(f"Config error: {message}")
