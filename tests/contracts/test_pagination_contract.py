from search_render.results import pagination
from search_render.errors import (
    EmptyQueryError,
    InvalidPageError,
    RenderError,
    StorageDecodeError,
    StorageReadError,
)


def test_window_thresholds_are_frozen() -> None:
    # Mirrored by the interactive frontend; both must change together.
    assert pagination.WINDOW_RADIUS == 5
    assert pagination.WINDOW_SIZE == 10


def test_window_never_exceeds_ten_links() -> None:
    for total in range(1, 60):
        for current in range(total):
            start, end = pagination.page_window(current, total)
            assert 0 <= start <= current < end <= total
            assert end - start <= 10
            if current > 0:
                assert start >= 1


def test_error_status_codes() -> None:
    assert EmptyQueryError().status_code == 404
    assert InvalidPageError("x").status_code == 400
    assert StorageReadError("x").status_code == 500
    assert StorageDecodeError("x").status_code == 500
    assert RenderError("x").status_code == 500
