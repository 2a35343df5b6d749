from rdstail.markers import MarkerTable


def test_unknown_file_has_no_marker():
    markers = MarkerTable()

    assert markers.get("error/postgresql.log") is None
    assert "error/postgresql.log" not in markers
    assert len(markers) == 0


def test_advance_replaces_marker():
    markers = MarkerTable()

    markers.advance("error/postgresql.log", "1:100")
    markers.advance("error/postgresql.log", "1:250")

    assert markers.get("error/postgresql.log") == "1:250"
    assert list(markers) == ["error/postgresql.log"]


def test_missing_marker_keeps_previous():
    markers = MarkerTable()

    markers.advance("error/mysql-error.log", "7:10")
    markers.advance("error/mysql-error.log", None)
    markers.advance("error/mysql-error.log", "")

    assert markers.get("error/mysql-error.log") == "7:10"


def test_files_are_tracked_independently():
    markers = MarkerTable()

    markers.advance("a.log", "1")
    markers.advance("b.log", "2")

    assert markers.get("a.log") == "1"
    assert markers.get("b.log") == "2"
    assert len(markers) == 2
