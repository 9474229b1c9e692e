import os
from datetime import datetime, timezone

from kodus_installer.MODELS.install_config import ConfigurationMap
from kodus_installer.PARSERS.env_parser import EnvFileWriter, EnvParser, backup_timestamp


def test_parse_from_string():
    content = """
    KEY1=VALUE1
    # This is a comment
    KEY2="VALUE2" # Trailing comment
    EMPTY=
    SECRET=abc+/def==
    """
    env = EnvParser.parse_from_string(content)
    assert env['KEY1'] == 'VALUE1'
    assert env['KEY2'] == 'VALUE2'
    assert env['EMPTY'] == ''
    assert env['SECRET'] == 'abc+/def=='
    assert 'KEY3' not in env


def test_backup_timestamp_is_file_name_safe():
    moment = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
    assert backup_timestamp(moment) == "2024-01-02T03-04-05-678Z"


def test_write_serializes_key_value_lines(tmp_path):
    env_path = tmp_path / ".env"
    config = ConfigurationMap(entries={"A": "1", "EMPTY": "", "B": "x=y"})

    backup = EnvFileWriter(str(env_path)).write(config)

    assert backup is None
    assert env_path.read_text() == "A=1\nEMPTY=\nB=x=y"
    assert EnvParser.parse(str(env_path)) == {"A": "1", "EMPTY": "", "B": "x=y"}


def test_write_backs_up_existing_file(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text("OLD=value")

    backup = EnvFileWriter(str(env_path)).write(ConfigurationMap(entries={"NEW": "1"}))

    assert backup is not None
    assert os.path.basename(backup).startswith(".env.backup.")
    with open(backup) as f:
        assert f.read() == "OLD=value"
    assert env_path.read_text() == "NEW=1"
