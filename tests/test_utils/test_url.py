"""Tests for repository URL parsing."""

import pytest

from hosttrust.errors import RepositoryParseError
from hosttrust.utils.url import parse_repository_url


def test_parse_ssh_url_with_port():
    """ssh:// URL keeps user, host, port and path."""
    url = parse_repository_url("ssh://git@Git.Example.com:2222/org/repo.git")

    assert url.scheme == "ssh"
    assert url.user == "git"
    assert url.host == "git.example.com"
    assert url.port == 2222
    assert url.path == "/org/repo.git"
    assert url.host_token == "git.example.com:2222"


def test_parse_ssh_url_default_port():
    """ssh:// URL without port uses 22 and a bare token."""
    url = parse_repository_url("ssh://git@github.com/org/repo.git")

    assert url.port == 22
    assert url.host_token == "github.com"


@pytest.mark.parametrize("scheme", ["git+ssh", "ssh+git"])
def test_parse_ssh_scheme_aliases(scheme):
    """git+ssh and ssh+git are SSH transports."""
    url = parse_repository_url(f"{scheme}://github.com/org/repo.git")
    assert url.is_ssh
    assert url.host == "github.com"


def test_parse_scp_like():
    """scp-like shorthand is treated as SSH."""
    url = parse_repository_url("git@github.com:org/repo.git")

    assert url.is_ssh
    assert url.user == "git"
    assert url.host == "github.com"
    assert url.path == "org/repo.git"
    assert url.host_token == "github.com"


def test_parse_scp_like_without_user():
    """scp-like shorthand works without a user."""
    url = parse_repository_url("bitbucket.org:team/repo.git")
    assert url.is_ssh
    assert url.user is None
    assert url.host == "bitbucket.org"


def test_parse_scp_like_ipv6():
    """Bracketed IPv6 host in scp-like form."""
    url = parse_repository_url("git@[2001:db8::1]:repo.git")
    assert url.host == "2001:db8::1"
    assert url.host_token == "2001:db8::1"


def test_parse_https_is_not_ssh():
    """https remotes are recognized but not SSH."""
    url = parse_repository_url("https://example.com/org/repo.git")
    assert url.scheme == "https"
    assert not url.is_ssh


@pytest.mark.parametrize("path", ["/srv/git/repo.git", "./repo", "../other/repo.git"])
def test_parse_local_path(path):
    """Plain paths are local file repositories."""
    url = parse_repository_url(path)
    assert url.scheme == "file"
    assert url.path == path
    assert not url.is_ssh


def test_parse_file_url():
    """file:// URLs need no host."""
    url = parse_repository_url("file:///srv/git/repo.git")
    assert url.scheme == "file"
    assert url.host == ""


@pytest.mark.parametrize(
    "bad",
    [
        "",
        "   ",
        "ssh:///org/repo.git",
        "ssh://host:notaport/repo.git",
        "ssh://host:0/repo.git",
        "ssh://host:99999/repo.git",
        "https:///repo.git",
        "-oProxyCommand=evil:repo.git",
    ],
)
def test_parse_rejects_malformed(bad):
    """Malformed URLs raise RepositoryParseError."""
    with pytest.raises(RepositoryParseError):
        parse_repository_url(bad)


def test_parse_error_is_value_error():
    """RepositoryParseError can be caught as ValueError."""
    with pytest.raises(ValueError, match="Could not parse"):
        parse_repository_url("ssh:///repo.git")
