from unittest.mock import patch

import pytest

from heapgen import __main__
from heapgen.heapgen_main import Heapgen


def test_exit_status_from_main() -> None:
    with patch.object(Heapgen, "main", return_value=1):
        with pytest.raises(SystemExit) as excinfo:
            __main__.main()
    assert excinfo.value.code == 1


def test_unexpected_error(capsys: pytest.CaptureFixture) -> None:
    with patch.object(Heapgen, "main", side_effect=RuntimeError("boom")):
        with pytest.raises(SystemExit) as excinfo:
            __main__.main()
    assert excinfo.value.code == 1
    assert "ERROR: Calling heapgen main function failed: boom" in capsys.readouterr().err
