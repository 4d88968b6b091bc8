import pytest

from cubraycaster.app import StartupError, build_state, main
from cubraycaster.model import FRAME_DELAY, WIDTH, Side, rgb_to_int

XPM = '/* XPM */\nstatic char *t[] = {\n"2 2 1 1",\n"a c #FF0000",\n"aa",\n"aa"\n};\n'

GOOD_GRID = "111111\n100001\n10N001\n111111\n"


def write_scene(tmp_path, grid=GOOD_GRID, xpm_text=XPM):
    xpm = tmp_path / "wall.xpm"
    xpm.write_text(xpm_text)
    cub = tmp_path / "scene.cub"
    cub.write_text(
        f"NO {xpm}\nSO {xpm}\nWE {xpm}\nEA {xpm}\n\n"
        "F 220,100,0\nC 225,30,0\n\n" + grid
    )
    return cub


def test_build_state_from_valid_scene(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state = build_state(write_scene(tmp_path))
    assert state.scene.floor_color == rgb_to_int(220, 100, 0)
    assert state.scene.ceiling_color == rgb_to_int(225, 30, 0)
    assert (state.player.dir_x, state.player.dir_y) == (0.0, -1.0)
    assert state.textures[Side.NORTH].pixel(0, 0) == 0xFF0000
    assert set(state.textures) == set(Side)
    assert state.animation.frames == []
    assert state.mouse_x == WIDTH // 2


def test_build_state_loads_sprite_frames(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    sprites = tmp_path / "textures" / "sprites"
    sprites.mkdir(parents=True)
    for number in range(1, 10):
        (sprites / f"{number}.xpm").write_text(XPM)
    state = build_state(write_scene(tmp_path))
    assert len(state.animation.frames) == 9
    assert state.animation.frame_delay == FRAME_DELAY


def test_build_state_rejects_invalid_map(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cub = write_scene(tmp_path, grid="111111\n10NS01\n111111\n")
    with pytest.raises(StartupError) as info:
        build_state(cub)
    assert str(info.value) == "The map is not valid"


def test_build_state_rejects_broken_texture(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cub = write_scene(tmp_path, xpm_text="not an image")
    with pytest.raises(StartupError) as info:
        build_state(cub)
    assert str(info.value) == "north texture can't loaded"


def test_main_without_arguments(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert "Error" in err
    assert "incorrect input" in err


def test_main_rejects_wrong_extension(tmp_path, capsys):
    other = tmp_path / "scene.txt"
    other.write_text("x")
    assert main([str(other)]) == 1
    assert "incorrect input" in capsys.readouterr().err


def test_main_reports_invalid_map(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    cub = write_scene(tmp_path, grid="111111\n10NS01\n111111\n")
    assert main([str(cub)]) == 1
    assert "The map is not valid" in capsys.readouterr().err