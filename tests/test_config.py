from pathlib import Path

from robot_gateway import constants
from robot_gateway.config import load_config, save_config


def test_load_config_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "robot-gateway.cfg"
    config = load_config(config_path)

    assert config.path == config_path
    assert config.server.host == "0.0.0.0"
    assert config.server.port == 80
    assert config.server.max_body_bytes == constants.MAX_BODY_BYTES
    assert config.server.io_timeout_seconds == 10.0
    assert config.device.family == "dog"
    assert config.device.device_id is None
    assert config.device.firmware_version is None
    assert config.device.has_hands is False
    assert config.device.initial_volume == 100
    assert config.device.audio_enabled is True
    assert config.logging.level == "INFO"
    assert config.logging.path is None


def test_load_config_overrides_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "robot-gateway.cfg"
    config_file.write_text(
        """
[server]
host = 127.0.0.1
port = 8080
max_body_bytes = 512

[device]
family = Palqiqi
device_id = palqiqi-hall
firmware_version = 2.4.1
has_hands = yes

[logging]
level = DEBUG
path = ~/gateway.log
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.server.host == "127.0.0.1"
    assert config.server.port == 8080
    assert config.server.max_body_bytes == 512
    assert config.device.family == "palqiqi"
    assert config.device.device_id == "palqiqi-hall"
    assert config.device.firmware_version == "2.4.1"
    assert config.device.has_hands is True
    assert config.logging.level == "DEBUG"
    assert config.logging.path == Path("~/gateway.log").expanduser()


def test_load_config_clamps_out_of_range_values(tmp_path: Path) -> None:
    config_file = tmp_path / "robot-gateway.cfg"
    config_file.write_text(
        """
[server]
max_body_bytes = 0
io_timeout_seconds = -3

[device]
initial_volume = 140
battery_percent = -20
time_scale = -1
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.server.max_body_bytes == 1
    assert config.server.io_timeout_seconds == 10.0
    assert config.device.initial_volume == 100
    assert config.device.battery_percent == 0
    assert config.device.time_scale == 0.0


def test_blank_device_id_falls_back(tmp_path: Path) -> None:
    config_file = tmp_path / "robot-gateway.cfg"
    config_file.write_text("[device]\ndevice_id =\n", encoding="utf-8")

    assert load_config(config_file).device.device_id is None


def test_save_config_round_trips(tmp_path: Path) -> None:
    config_path = tmp_path / "nested" / "robot-gateway.cfg"
    config = load_config(config_path)
    config.raw.set("device", "device_id", "dog-garden")

    save_config(config)

    assert config_path.exists()
    assert load_config(config_path).device.device_id == "dog-garden"
