"""
Test cases for network utilities
"""

import unittest

from panoscroll_py import network
from panoscroll_py.network import generate_qr_code_image, get_ip_address, print_qr_code, save_qr_code


class TestNetworkUtils(unittest.TestCase):
    """Test cases for network utilities"""

    def test_get_ip_address(self):
        """Test IP address detection"""
        ip = get_ip_address()
        self.assertIsInstance(ip, str)
        parts = ip.split('.')
        self.assertEqual(len(parts), 4)
        for part in parts:
            self.assertTrue(0 <= int(part) <= 255)

    def test_generate_qr_code(self):
        """Test QR code generation"""
        qr_image = generate_qr_code_image("https://192.168.1.20:8443/index.html")
        self.assertIsNotNone(qr_image)
        width_height_ratio = qr_image.width / qr_image.height
        self.assertAlmostEqual(width_height_ratio, 1.0, delta=0.1)
        self.assertGreater(qr_image.width, 200)
        self.assertGreater(qr_image.height, 200)


class _UnroutableSocket:
    def __init__(self, *args):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def settimeout(self, value):
        pass

    def connect(self, address):
        raise OSError("Network is unreachable")


def test_get_ip_address_falls_back_to_loopback(monkeypatch):
    monkeypatch.setattr(network.socket, "socket", _UnroutableSocket)
    assert get_ip_address() == "127.0.0.1"


def test_save_qr_code(tmp_path):
    target = save_qr_code("https://192.168.1.20:8443/index.html", tmp_path / "url.png")
    assert target.read_bytes().startswith(b"\x89PNG")


def test_print_qr_code(capsys):
    print_qr_code("https://192.168.1.20:8443/index.html")
    assert capsys.readouterr().out.strip()


if __name__ == '__main__':
    unittest.main()
