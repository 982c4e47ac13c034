from .encode import FormEncoder, encode, escape, pairs
from .errors import (
    ConfigError,
    CycleError,
    DepthError,
    EncodeError,
    EscapeError,
)
from .request import prepare
from .runner import Runner
from .version import __version__
