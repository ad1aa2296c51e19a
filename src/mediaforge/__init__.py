"""mediaforge: upload, transcode and thumbnail videos over HTTP."""

__version__ = "0.1.0"
