"""SCPI client library for Rigol DS1000Z series oscilloscopes.

This package provides SCPI (Standard Commands for Programmable Instruments)
communication with bench oscilloscopes over TCP. It includes:

- A command model: hierarchical categories and typed command descriptors
- A catalogue of common and DS1000Z-specific commands
- Transport abstraction with a TCP and a PyVISA implementation
- A request/response engine with concatenated and completion-gated queries
- Reply parsers and the scope model table
- Custom exception types for transport and protocol errors

Typical usage::

    from dslib import Ds1000

    scope = Ds1000.open_lan("192.168.1.100")
    identity = scope.identify()
    print(f"Connected to {identity.model} ({identity.serial})")
    scope.close()
"""

from dslib.config import ScopeConfig, load_config
from dslib.device import Device, split_response
from dslib.ds1000 import Ds1000
from dslib.errors import (
    DefinitionError,
    DeviceConnectionError,
    DslibError,
    ParseError,
    ProtocolMismatchError,
    ReadTimeoutError,
    ResolutionError,
    ScpiCommandError,
    ScpiInstrumentError,
    TransportError,
)
from dslib.lan import DEVICE_PORT, LanTransport
from dslib.model import ModelCapabilities, ScopeModel, get_model_capabilities, to_model
from dslib.scpi import GLOBAL, ROOT, Category, Command
from dslib.scpi.parsers import Identity
from dslib.transport import DEFAULT_TIMEOUT, NO_TIMEOUT, Transport
from dslib.visa import VisaTransport

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Command model
    "Category",
    "Command",
    "GLOBAL",
    "ROOT",
    # Engine
    "Device",
    "split_response",
    # Driver
    "Ds1000",
    "Identity",
    # Config
    "ScopeConfig",
    "load_config",
    # Models
    "ModelCapabilities",
    "ScopeModel",
    "get_model_capabilities",
    "to_model",
    # Transport
    "DEFAULT_TIMEOUT",
    "DEVICE_PORT",
    "LanTransport",
    "NO_TIMEOUT",
    "Transport",
    "VisaTransport",
    # Errors
    "DefinitionError",
    "DeviceConnectionError",
    "DslibError",
    "ParseError",
    "ProtocolMismatchError",
    "ReadTimeoutError",
    "ResolutionError",
    "ScpiCommandError",
    "ScpiInstrumentError",
    "TransportError",
]
