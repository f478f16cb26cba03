from .discussion_client import EdClient, SyncEdClient
from .environconfig import ClientConfig
from .errors import ConfigError, DecodeError, EdError, HttpStatusError, TransportError
from .transport import AiohttpTransport, RawResponse, RequestsTransport
