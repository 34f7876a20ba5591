"""
Unit tests for app/db/mongodb.py, app/db/blob_store.py and the decode step
in app/schemas/schemas.py
"""

from unittest.mock import MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from app.core.errors import BackendError, DecodeError, DuplicateRecordError, NotFoundError
from app.db.blob_store import LocalBlobStore, safe_filename
from app.db.mongodb import DocumentStore
from app.schemas.schemas import decode_application, decode_job


class TestDocumentStore:

    def test_insert_then_get(self, store):
        doc_id = store.insert("jobs", {"title": "T"})
        assert isinstance(doc_id, str)
        assert store.get("jobs", doc_id)["title"] == "T"

    def test_get_malformed_id_returns_none(self, store):
        assert store.get("jobs", "nope") is None

    def test_query_equality_and_order(self, store):
        store.insert("applications", {"job_id": "a", "n": 1})
        store.insert("applications", {"job_id": "b", "n": 2})
        store.insert("applications", {"job_id": "a", "n": 3})

        docs = store.query("applications", {"job_id": "a"}, order_by=("n", "desc"))
        assert [d["n"] for d in docs] == [3, 1]

    def test_delete(self, store):
        doc_id = store.insert("jobs", {"title": "T"})
        assert store.delete("jobs", doc_id) is True
        assert store.delete("jobs", doc_id) is False
        assert store.delete("jobs", "nope") is False

    def test_server_timestamp_has_millisecond_precision(self, store, clock):
        clock.now = clock.now.replace(microsecond=123456)
        assert store.server_timestamp().microsecond == 123000

    def test_pymongo_errors_become_backend_errors(self):
        database = MagicMock()
        database.__getitem__.return_value.find.side_effect = ServerSelectionTimeoutError("down")
        store = DocumentStore(database)

        with pytest.raises(BackendError) as exc_info:
            store.query("jobs")
        assert exc_info.value.message == "Something went wrong. Please try again."

    def test_unique_index_violation_is_distinct(self, store):
        store.init_indexes()
        store.insert("users", {"email": "ada@example.com"})

        with pytest.raises(DuplicateRecordError):
            store.insert("users", {"email": "ada@example.com"})
        assert store.collection("users").count_documents({}) == 1


class TestDecode:

    def test_job_id_comes_from_object_id(self, store):
        doc_id = store.insert("jobs", {"title": "T", "description": "D", "created_at": store.server_timestamp()})
        job = decode_job(store.get("jobs", doc_id))
        assert job.id == doc_id

    def test_missing_field_raises_decode_error(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_job({"_id": "abc", "title": "T"})
        assert exc_info.value.entity == "job"

    def test_wrong_type_raises_decode_error(self):
        with pytest.raises(DecodeError):
            decode_application({
                "_id": "abc", "job_id": "j", "full_name": "Jane", "email": "jane@x.com",
                "resume_url": "https://x.com/r.pdf", "submitted_at": "yesterday-ish",
            })

    def test_none_decodes_to_none(self):
        assert decode_job(None) is None


class TestBlobStore:

    def test_upload_and_url(self, tmp_path):
        blobs = LocalBlobStore(str(tmp_path), "https://jobs.example.com/")
        key = blobs.upload("resumes/J1/1-cv.pdf", b"data", "application/pdf")
        assert blobs.path_for(key).read_bytes() == b"data"
        assert blobs.public_url(key) == "https://jobs.example.com/api/files/resumes/J1/1-cv.pdf"

    def test_keys_cannot_escape_root(self, tmp_path):
        blobs = LocalBlobStore(str(tmp_path / "uploads"), "http://testserver")
        with pytest.raises(NotFoundError):
            blobs.path_for("../secret.txt")

    @pytest.mark.parametrize("name,expected", [
        ("cv.pdf", "cv.pdf"),
        ("My Resume (final).docx", "My_Resume_final_.docx"),
        ("C:\\Users\\jane\\cv.pdf", "cv.pdf"),
        ("../../etc/passwd", "passwd"),
        ("", "resume"),
    ])
    def test_safe_filename(self, name, expected):
        assert safe_filename(name) == expected
