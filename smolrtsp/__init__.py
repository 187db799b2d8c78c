"""RTSP message types, SDP, RTP transports and H.264/H.265 NAL packetization."""

__version__ = "0.1.0"