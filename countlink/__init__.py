"""Wi-Fi station, TCP client and counter tasks that send a framed wrapping counter to a remote TCP host."""

__version__ = "0.5.0"

__all__ = ["messages", "protocol", "counter", "tcp_client", "wifi_station", "app"]