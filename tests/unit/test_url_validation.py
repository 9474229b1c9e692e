import click
import pytest

from kodus_installer.CLI.prompts import public_url
from kodus_installer.UTILS.url_validation import INVALID_URL_MESSAGE, check_public_url


@pytest.mark.parametrize("url", [
    "https://kodus.yourdomain.com",
    "http://kodus.example.org:8080",
    "https://app.kodus.io/base",
])
def test_valid_urls(url):
    assert check_public_url(url) is None


def test_rejects_text_without_scheme():
    assert check_public_url("not-a-url") == INVALID_URL_MESSAGE


def test_rejects_non_http_scheme():
    assert check_public_url("ftp://files.example.com") == "URL must start with http:// or https://"


def test_rejects_hostname_without_dot():
    assert check_public_url("http://localhost:3000") == "URL must include a valid domain name"


def test_public_url_value_proc_raises_bad_parameter():
    with pytest.raises(click.BadParameter):
        public_url("not-a-url")
    assert public_url("  https://kodus.example.com ") == "https://kodus.example.com"
