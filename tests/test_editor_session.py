import pytest
from PIL import Image

from cutout_editor.core.editor_session import CutoutSession
from cutout_editor.core.editor_tools import SegmentMode
from cutout_editor.core.selection import Rect
from cutout_editor.utils.config import AppConfig
from cutout_editor.utils.validators import InvalidInputError


@pytest.fixture
def messages():
    return []


@pytest.fixture
def session(messages, dot_image):
    s = CutoutSession(on_status=messages.append, tolerance=0)
    s.load_image(dot_image)
    return s


def alpha_at(img, xy):
    return img.getpixel(xy)[3]


def test_requires_loaded_image():
    s = CutoutSession()
    with pytest.raises(InvalidInputError):
        s.remove_background()
    with pytest.raises(InvalidInputError):
        s.sample_background()


def test_load_rejects_empty_image():
    with pytest.raises(InvalidInputError):
        CutoutSession().load_image(Image.new("RGB", (0, 0)))


def test_remove_background_then_undo_redo(session, messages, dot_image):
    out = session.remove_background()
    assert alpha_at(out, (0, 0)) == 0
    assert alpha_at(out, (2, 2)) == 255
    assert session.last_mask is not None and session.last_mask.count() == 15

    restored = session.undo()
    assert restored.mode == "RGB"
    assert session.current.getpixel((2, 2)) == dot_image.getpixel((2, 2))
    assert session.last_mask is None

    again = session.redo()
    assert alpha_at(again, (0, 0)) == 0
    assert session.undo() is not None
    assert session.undo() is None
    assert messages[-1] == "Nothing to undo"


def test_original_not_aliased(session, dot_image):
    dot_image.putpixel((0, 0), (1, 2, 3))
    assert session.original.getpixel((0, 0)) == (255, 255, 255)


def test_seed_crop_keeps_clicked_region(session):
    out = session.seed_crop((2, 2))
    assert alpha_at(out, (2, 2)) == 255
    assert alpha_at(out, (0, 0)) == 0


def test_rect_limits_the_cut(session):
    out = session.remove_background(rect=(0, 0, 2, 2))
    assert alpha_at(out, (0, 0)) == 0
    assert alpha_at(out, (1, 1)) == 0
    assert alpha_at(out, (3, 3)) == 255
    out = session.remove_background(rect=Rect())
    assert alpha_at(out, (3, 3)) == 0


def test_cuts_are_computed_from_original(session):
    session.seed_crop((2, 2))
    out = session.remove_background()
    assert out.getpixel((2, 2)) == (0, 0, 0, 255)
    assert alpha_at(out, (1, 1)) == 0


def test_shape_crop_validates_path(session):
    with pytest.raises(InvalidInputError):
        session.shape_crop([(0, 0), (3, 3)])
    assert not session.history.can_undo


def test_shape_crop_records_history(session):
    out = session.shape_crop([(0, 0), (4, 0), (4, 4), (0, 4)])
    assert out.getchannel("A").getextrema() == (255, 255)
    assert session.history.can_undo


def test_auto_detect_without_seeds_changes_nothing(messages, uniform_image):
    s = CutoutSession(on_status=messages.append)
    s.load_image(uniform_image)
    assert s.auto_detect() is s.current
    assert not s.history.can_undo
    assert messages[-1] == "No shapes detected"


def test_auto_detect_keeps_shapes(square_image):
    s = CutoutSession(tolerance=10)
    s.load_image(square_image)
    out = s.auto_detect()
    assert alpha_at(out, (20, 20)) == 255


def test_run_dispatches_modes(session):
    assert alpha_at(session.run(SegmentMode.BACKGROUND), (0, 0)) == 0
    assert alpha_at(session.run(SegmentMode.SEED, seed=(0, 0)), (2, 2)) == 0
    with pytest.raises(InvalidInputError):
        session.run(SegmentMode.SEED)


def test_show_mask_toggles_display(session):
    assert session.display_image() is session.current
    session.set_show_mask(True)
    assert session.display_image() is session.current
    session.remove_background()
    debug = session.display_image()
    assert debug.getpixel((0, 0)) == (255, 0, 0, 128)
    session.set_show_mask(False)
    assert session.display_image() is session.current


def test_loading_clears_history(session, square_image):
    session.remove_background()
    session.load_image(square_image)
    assert not session.history.can_undo
    assert session.last_mask is None
    assert session.undo() is None


def test_tolerance_clamped(session, messages):
    session.set_tolerance(500)
    assert session.tolerance == 200
    assert messages[-1] == "Tolerance: 200"


def test_open_and_save(tmp_path, dot_image):
    src = tmp_path / "dot.png"
    dot_image.save(src)
    config = AppConfig(tmp_path / "config.json")
    s = CutoutSession(config=config, tolerance=0)
    s.open_file(src)
    assert config.recent_files == [str(src.resolve())]

    s.remove_background()
    out = tmp_path / "out" / "cut.png"
    s.save(out)
    with Image.open(out) as saved:
        assert saved.mode == "RGBA"
        assert saved.getpixel((0, 0))[3] == 0
