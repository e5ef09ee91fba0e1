import base64
import io

import pytest

from pbkdf2key.cli import main


@pytest.fixture
def stdin_password(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("password\n"))


class TestCli:
    
    def test_derive_hex(self, stdin_password, capsys):
        code = main(["--hash", "sha1", "-i", "4096", "-l", "20", "--salt", "salt"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "4b007901b765489abead49d926f721d065a429c1"
    
    def test_derive_base64(self, stdin_password, capsys):
        code = main(["--hash", "sha1", "-i", "1", "-l", "20", "--salt", "salt", "--format", "base64"])
        assert code == 0
        out = capsys.readouterr().out.strip()
        assert base64.b64decode(out).hex() == "0c60c80f961f0e71f3a9b524af6012062fe037a6"
    
    def test_salt_hex(self, stdin_password, capsys):
        code = main(["--hash", "sha1", "-i", "1", "-l", "20", "--salt-hex", b"salt".hex()])
        assert code == 0
        assert capsys.readouterr().out.strip() == "0c60c80f961f0e71f3a9b524af6012062fe037a6"
    
    def test_default_hash(self, stdin_password, capsys):
        code = main(["-i", "1", "-l", "32", "--salt", "salt"])
        assert code == 0
        expected = "120fb6cffcf8b32c43e7225256c4f837a86548c92ccc35480805987cb70be17b"
        assert capsys.readouterr().out.strip() == expected
    
    def test_list_hashes(self, capsys):
        assert main(["--list-hashes"]) == 0
        names = capsys.readouterr().out.split()
        assert "sha256" in names
        assert names == sorted(names)
    
    def test_zero_iterations_fails(self, stdin_password, capsys):
        code = main(["-i", "0", "-l", "20", "--salt", "salt"])
        assert code == 2
        assert capsys.readouterr().out == ""
    
    def test_unknown_hash_fails(self, stdin_password, capsys):
        code = main(["--hash", "md4", "-i", "1", "-l", "20", "--salt", "salt"])
        assert code == 2
        assert capsys.readouterr().out == ""
    
    def test_missing_salt(self, stdin_password):
        with pytest.raises(SystemExit) as exc:
            main(["-i", "1", "-l", "20"])
        assert exc.value.code == 2
    
    def test_missing_iterations(self, stdin_password):
        with pytest.raises(SystemExit) as exc:
            main(["-l", "20", "--salt", "salt"])
        assert exc.value.code == 2
    
    def test_invalid_salt_hex(self, stdin_password):
        with pytest.raises(SystemExit) as exc:
            main(["-i", "1", "-l", "20", "--salt-hex", "zz"])
        assert exc.value.code == 2
    
    def test_salt_options_exclusive(self, stdin_password):
        with pytest.raises(SystemExit):
            main(["-i", "1", "-l", "20", "--salt", "a", "--salt-hex", "61"])
    
    def test_unencodable_passphrase_fails(self, monkeypatch, capsys):
        monkeypatch.setenv("PBKDF2KEY_PASSPHRASE_ENCODING", "ascii")
        monkeypatch.setattr("sys.stdin", io.StringIO("pässwörd\n"))
        code = main(["--hash", "sha1", "-i", "1", "-l", "20", "--salt", "salt"])
        assert code == 2
        assert capsys.readouterr().out == ""
    
    def test_unencodable_salt(self, monkeypatch, stdin_password):
        monkeypatch.setenv("PBKDF2KEY_PASSPHRASE_ENCODING", "ascii")
        with pytest.raises(SystemExit) as exc:
            main(["-i", "1", "-l", "20", "--salt", "sälz"])
        assert exc.value.code == 2
