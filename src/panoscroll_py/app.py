"""Main entry point for the Panoscroll application."""
from __future__ import annotations

import random
import ssl

from .config import AppConfig, data_path, load_config
from .network import get_ip_address, print_qr_code, save_qr_code
from .server import PanoscrollServer
from .ssl_utils import generate_self_signed_cert

CERT_FILENAME = "server.crt"
KEY_FILENAME = "server.key"
QR_FILENAME = "panoscroll-url.png"


class PanoscrollApp:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or load_config()
        self.server = PanoscrollServer(config=self.config)
        self.host = self.config.server.host or get_ip_address()
        self.port = self.config.server.port or random.randint(1024, 65535)
        scheme = "https" if self.config.server.use_ssl else "http"
        self.base_url = f"{scheme}://{self.host}:{self.port}"

    def _ssl_context(self) -> ssl.SSLContext | None:
        if not self.config.server.use_ssl:
            print("[Panoscroll] WARNING: serving plain HTTP; most phones only report orientation over HTTPS")
            return None
        cert_file = data_path(CERT_FILENAME)
        key_file = data_path(KEY_FILENAME)
        generate_self_signed_cert(self.host, cert_file, key_file)
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
        context.load_cert_chain(certfile=str(cert_file), keyfile=str(key_file))
        return context

    def _announce(self) -> None:
        url = f"{self.base_url}/index.html"
        print(f"[Panoscroll] Server running at {self.base_url}")
        print(f"[Panoscroll] Open {url} on the phone, or scan:")
        print_qr_code(url)
        target = save_qr_code(url, data_path(QR_FILENAME))
        print(f"[Panoscroll] QR code saved to {target}")

    def run(self) -> None:
        context = self._ssl_context()
        self._announce()
        self.server.run(host=self.host, port=self.port, ssl_context=context, use_reloader=False)

    def shutdown(self) -> None:
        self.server.shutdown()


def main() -> None:
    app = PanoscrollApp()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n[Panoscroll] exiting")
    except OSError as exc:
        print(f"[Panoscroll] Server startup failed: {exc}")
        raise
    finally:
        app.shutdown()


if __name__ == "__main__":
    main()
