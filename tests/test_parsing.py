import pytest

from cubraycaster.model import Side, rgb_to_int
from cubraycaster.parsing import (
    MapError,
    check_arguments,
    check_extension,
    check_no_output,
    check_player_other_char,
    check_top_bottom_walls,
    display_grid,
    find_colors,
    find_grid,
    find_player,
    find_textures,
    parse_color,
    parse_scene,
    read_lines,
    remove_newline,
)

HEADER = (
    "NO ./north.xpm\n"
    "SO ./south.xpm\n"
    "WE ./west.xpm\n"
    "EA ./east.xpm\n"
    "\n"
    "F 220,100,1\n"
    "C 225,30,5\n"
    "\n"
)
GRID = "111111\n100001\n10N001\n111111\n"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("north", "south", "west", "east"):
        (tmp_path / f"{name}.xpm").write_text("/* XPM */\n")
    return tmp_path


def write_scene(directory, text, name="scene.cub"):
    path = directory / name
    path.write_text(text)
    return path


def test_check_extension():
    assert check_extension("maps/level.cub", ".cub") is True
    assert check_extension("maps/level.xpm", ".cub") is False
    assert check_extension("cub", ".cub") is False


def test_check_arguments_accepts_one_cub_file(workdir):
    path = write_scene(workdir, HEADER + GRID)
    assert check_arguments([str(path)]) == str(path)


def test_check_arguments_rejects_wrong_count(workdir):
    path = write_scene(workdir, HEADER + GRID)
    with pytest.raises(MapError):
        check_arguments([])
    with pytest.raises(MapError):
        check_arguments([str(path), str(path)])


def test_check_arguments_rejects_missing_and_wrong_extension(workdir):
    with pytest.raises(MapError):
        check_arguments([str(workdir / "absent.cub")])
    with pytest.raises(MapError):
        check_arguments([str(workdir / "north.xpm")])


def test_read_lines_splits_on_newline_only(tmp_path):
    path = tmp_path / "f.cub"
    path.write_bytes(b"a\r\nb\nc")
    assert read_lines(path) == ["a\r\n", "b\n", "c"]


def test_read_lines_missing_file(tmp_path):
    with pytest.raises(MapError):
        read_lines(tmp_path / "nothing.cub")


def test_remove_newline():
    assert remove_newline("./a.xpm\n") == "./a.xpm"
    assert remove_newline("a\nb\n") == "ab"


def test_parse_color_valid():
    assert parse_color("F 220,100,0\n") == ("F", rgb_to_int(220, 100, 0))
    assert parse_color("  C\t1,2,3") == ("C", rgb_to_int(1, 2, 3))


@pytest.mark.parametrize(
    "line",
    ["F 256,0,0\n", "F 1, 2, 3\n", "F 1,2\n", "F 1,2,3,4\n", "X 1,2,3\n", "F a,2,3\n"],
)
def test_parse_color_invalid(line):
    with pytest.raises(MapError):
        parse_color(line)


def test_find_colors_valid():
    lines = (HEADER + GRID).splitlines(keepends=True)
    assert find_colors(lines) == (rgb_to_int(220, 100, 1), rgb_to_int(225, 30, 5))


def test_find_colors_black_is_rejected():
    with pytest.raises(MapError):
        find_colors(["F 0,0,0\n", "C 1,1,1\n"])


def test_find_colors_missing_or_after_grid():
    with pytest.raises(MapError):
        find_colors(["F 1,1,1\n"])
    with pytest.raises(MapError):
        find_colors(["F 1,1,1\n", "111\n", "C 1,1,1\n"])


def test_find_textures_valid(workdir):
    lines = (HEADER + GRID).splitlines(keepends=True)
    textures = find_textures(lines)
    assert textures == {
        Side.NORTH: "./north.xpm",
        Side.SOUTH: "./south.xpm",
        Side.WEST: "./west.xpm",
        Side.EAST: "./east.xpm",
    }


def test_find_textures_duplicate_key(workdir):
    lines = ["NO ./north.xpm\n", "NO ./south.xpm\n"]
    with pytest.raises(MapError):
        find_textures(lines)


def test_find_textures_unknown_key(workdir):
    with pytest.raises(MapError):
        find_textures(["XX ./north.xpm\n"])


def test_find_textures_missing_file_or_bad_extension(workdir):
    (workdir / "west.png").write_text("x")
    base = ["NO ./north.xpm\n", "SO ./south.xpm\n", "EA ./east.xpm\n"]
    with pytest.raises(MapError):
        find_textures(base + ["WE ./west.png\n"])
    with pytest.raises(MapError):
        find_textures(base + ["WE ./nowhere.xpm\n"])


def test_find_grid_cuts_out_map():
    lines = ["NO a\n", "\n", "  111\n", "  101\n", "\n", "  111\n", "\n"]
    assert find_grid(lines) == ["  111", "  101", "", "  111"]


def test_find_grid_without_map():
    with pytest.raises(MapError):
        find_grid(["NO a\n", "F 1,2,3\n"])


def test_check_top_bottom_walls():
    assert check_top_bottom_walls(" 111 1\n") is True
    assert check_top_bottom_walls("1101") is False


def test_check_no_output():
    assert check_no_output(["111", "101", "111"]) is True
    assert check_no_output(["1111", "10 1", "1111"]) is False
    assert check_no_output(["111", "011", "111"]) is False
    assert check_no_output(["111", "1001", "111"]) is False


def test_check_player_other_char():
    assert check_player_other_char(["111", "1N1", "111"]) is True
    assert check_player_other_char(["1111", "1NS1", "1111"]) is False
    assert check_player_other_char(["111", "101", "111"]) is False
    assert check_player_other_char(["1111", "1NX1", "1111"]) is False


def test_find_player_north():
    grid = ["111", "1N1", "111"]
    player, rows = find_player(grid)
    assert rows == ["111", "101", "111"]
    assert grid == ["111", "1N1", "111"]
    assert player.x == pytest.approx(1.01)
    assert player.y == pytest.approx(1.01)
    assert (player.dir_x, player.dir_y) == (0.0, -1.0)
    assert (player.vector_x, player.vector_y) == (0.66, 0.0)


def test_find_player_west_and_missing():
    player, _ = find_player(["1111", "10W1", "1111"])
    assert (player.dir_x, player.dir_y) == (-1.0, 0.0)
    assert (player.vector_x, player.vector_y) == (0.0, -0.66)
    with pytest.raises(MapError):
        find_player(["111", "101", "111"])


def test_display_grid(capsys):
    display_grid(["111", "1N0"])
    assert capsys.readouterr().out == "###\n#N \n"


def test_parse_scene_valid(workdir, capsys):
    path = write_scene(workdir, HEADER + GRID)
    scene, player = parse_scene(path)
    assert scene.grid == ["111111", "100001", "100001", "111111"]
    assert scene.floor_color == rgb_to_int(220, 100, 1)
    assert scene.ceiling_color == rgb_to_int(225, 30, 5)
    assert scene.textures[Side.EAST] == "./east.xpm"
    assert player.x == pytest.approx(2.01)
    assert player.y == pytest.approx(2.01)
    assert "#" in capsys.readouterr().out


@pytest.mark.parametrize(
    "text",
    [
        GRID + HEADER,
        HEADER + "111111\n100001\n10N00 \n111111\n",
        HEADER + "111111\n1N0S01\n111111\n",
        HEADER + "111\n1N1\n",
        HEADER + "111111\n100001\n10N001\n110011\n",
    ],
)
def test_parse_scene_invalid(workdir, text):
    path = write_scene(workdir, text)
    with pytest.raises(MapError):
        parse_scene(path)