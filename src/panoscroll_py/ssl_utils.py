"""
SSL certificate generation utilities

Browsers only deliver device orientation events to pages served over HTTPS,
so the phone talks to a self-signed endpoint.
"""
from __future__ import annotations

from pathlib import Path
import random

from OpenSSL import crypto

TEN_YEARS_S = 10 * 365 * 24 * 60 * 60


def get_cert_hostname(cert_file: Path) -> str | None:
    """Get the hostname from an existing certificate"""
    try:
        cert = crypto.load_certificate(crypto.FILETYPE_PEM, Path(cert_file).read_bytes())
    except (OSError, crypto.Error):
        return None
    return cert.get_subject().CN


def cert_exists_and_valid(cert_file: Path, key_file: Path, hostname: str) -> bool:
    """Check if certificate files exist, belong together and are issued for hostname"""
    cert_file, key_file = Path(cert_file), Path(key_file)
    if not (cert_file.exists() and key_file.exists()):
        return False
    if get_cert_hostname(cert_file) != hostname:
        return False
    try:
        cert = crypto.load_certificate(crypto.FILETYPE_PEM, cert_file.read_bytes())
        key = crypto.load_privatekey(crypto.FILETYPE_PEM, key_file.read_bytes())
    except (OSError, crypto.Error):
        return False
    if cert.has_expired():
        return False
    return crypto.dump_publickey(crypto.FILETYPE_PEM, cert.get_pubkey()) == crypto.dump_publickey(
        crypto.FILETYPE_PEM, key
    )


def generate_self_signed_cert(hostname: str, cert_file: Path, key_file: Path, force_regenerate: bool = False) -> bool:
    """Generate a self-signed SSL certificate, reusing an existing one if valid.

    Returns True when new files were written.
    """
    if not force_regenerate and cert_exists_and_valid(cert_file, key_file, hostname):
        print(f"[SSL] Reusing existing SSL certificate for {hostname}")
        return False

    print(f"[SSL] Generating new SSL certificate for {hostname}")

    k = crypto.PKey()
    k.generate_key(crypto.TYPE_RSA, 2048)

    cert = crypto.X509()
    cert.get_subject().O = "Panoscroll"
    cert.get_subject().OU = "Panoscroll"
    cert.get_subject().CN = hostname
    cert.set_serial_number(random.randint(0, 1000000000))
    cert.gmtime_adj_notBefore(0)
    cert.gmtime_adj_notAfter(TEN_YEARS_S)
    cert.set_issuer(cert.get_subject())
    cert.set_pubkey(k)
    cert.sign(k, 'sha256')

    Path(cert_file).write_text(crypto.dump_certificate(crypto.FILETYPE_PEM, cert).decode("utf-8"))
    Path(key_file).write_text(crypto.dump_privatekey(crypto.FILETYPE_PEM, k).decode("utf-8"))
    return True
