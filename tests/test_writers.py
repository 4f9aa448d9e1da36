import json

import pytest

from src.app.core.exceptions import WriteError
from src.dumper.adapters.writers import JsonFileWriter
from src.dumper.ports.results import Page

PAGE = Page(docs=({"id": "1", "_version_": 11}, {"id": "2", "_version_": 12}))


@pytest.mark.asyncio
async def test_write_strips_reserved_field(tmp_path):
    path = tmp_path / "h.c.1.json"
    outcome = await JsonFileWriter(strip_reserved=True).write(1, PAGE, path)

    assert outcome.ok
    assert outcome.index == 1
    assert outcome.path == path
    assert json.loads(path.read_text(encoding="utf-8")) == [{"id": "1"}, {"id": "2"}]


@pytest.mark.asyncio
async def test_write_keeps_documents_when_fields_requested(tmp_path):
    path = tmp_path / "h.c.1.json"
    outcome = await JsonFileWriter(strip_reserved=False).write(1, PAGE, path)

    assert outcome.ok
    assert json.loads(path.read_bytes()) == list(PAGE.docs)


@pytest.mark.asyncio
async def test_write_truncates_existing_file(tmp_path):
    path = tmp_path / "h.c.1.json"
    path.write_text("x" * 1000)
    await JsonFileWriter(strip_reserved=True).write(1, PAGE, path)
    assert path.read_text() == '[{"id":"1"},{"id":"2"}]\n'


@pytest.mark.asyncio
async def test_write_error_is_returned_not_raised(tmp_path):
    path = tmp_path / "missing-dir" / "h.c.3.json"
    outcome = await JsonFileWriter(strip_reserved=True).write(3, PAGE, path)

    assert not outcome.ok
    assert isinstance(outcome.error, WriteError)
    assert outcome.error.path == path
    assert isinstance(outcome.error.__cause__, OSError)


@pytest.mark.asyncio
async def test_encode_error_is_scoped_to_file(tmp_path):
    path = tmp_path / "h.c.1.json"
    bad = Page(docs=({"id": "1", "v": float("nan")},))
    outcome = await JsonFileWriter(strip_reserved=False).write(1, bad, path)

    assert isinstance(outcome.error, WriteError)
    assert not path.exists()
