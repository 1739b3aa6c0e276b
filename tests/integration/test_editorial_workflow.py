"""Integration tests: AzureBackend against the in-memory API.

These run the full draft lifecycle (create, review, publish or delete) the
way an editor would drive it.
"""

import hashlib
import threading

import pytest

from cms_backend_azure.backend import AzureBackend
from cms_backend_azure.entries.models import DataFile, Entry, PersistOptions
from cms_backend_azure.media.models import (
    AssetProxy,
    DisplayURL,
    FileObject,
    UnpublishedEntryMediaFile,
)
from cms_backend_azure.vcs_client.auth import Credentials
from cms_backend_azure.vcs_client.memory_api import InMemoryAPI, memory_api_factory
from cms_backend_azure.vcs_client.models import StatusRecord
from cms_backend_azure.workflow.models import DeployStatus, WorkflowStatus

pytestmark = pytest.mark.integration


def new_post(slug, body="Draft body"):
    return Entry(
        data_files=[DataFile(path=f"content/posts/{slug}.md", slug=slug, raw=body)],
        assets=[
            AssetProxy(
                path=f"/static/media/{slug}.png",
                file_obj=FileObject(name=f"{slug}.png", data=f"png:{slug}".encode()),
            )
        ],
    )


def draft_options(slug):
    return PersistOptions(
        commit_message=f"Create posts {slug}",
        new_entry=True,
        use_workflow=True,
        collection_name="posts",
    )


class TestPublishedContent:
    """Reading and writing content on the main branch."""

    def test_status_after_authenticate(self, memory_backend):
        assert memory_backend.status().auth_status is True

    def test_commits_use_signed_in_user(self, memory_backend, memory_api):
        memory_backend.persist_entry(
            Entry(data_files=[DataFile(path="content/posts/c.md", slug="c", raw="C")]),
            PersistOptions(commit_message="Create c"),
        )
        assert memory_api.commits[-1].author.name == "Jane Editor"

    def test_entries_by_folder(self, memory_backend):
        entries = memory_backend.entries_by_folder("content/posts", "md")

        assert [e.file.path for e in entries] == [
            "content/posts/hello-world.md",
            "content/posts/second.md",
        ]
        assert "Hello World" in entries[0].data

    def test_get_media(self, memory_backend):
        media = memory_backend.get_media()

        assert [m.name for m in media] == ["icon.svg", "logo.png"]
        svg = memory_backend.object_urls.resolve(media[0].display_url)
        assert svg.content_type == "image/svg+xml"
        png = memory_backend.object_urls.resolve(media[1].display_url)
        assert png.data == b"\x89PNG\r\n\x1a\nlogo"

    def test_empty_media_folder(self, backend_config, test_user):
        api = InMemoryAPI(user=test_user, branch="main", files={"content/posts/a.md": "A"})
        backend = AzureBackend(backend_config, api_factory=memory_api_factory(api))
        backend.authenticate(Credentials(token="t"))

        assert backend.get_media() == []

    def test_persist_media_then_read_back(self, memory_backend):
        file_obj = FileObject(name="new.jpg", data=b"jpeg data")
        persisted = memory_backend.persist_media(
            AssetProxy(path="/static/media/new.jpg", file_obj=file_obj),
            PersistOptions(commit_message="Upload new.jpg"),
        )

        loaded = memory_backend.get_media_file("static/media/new.jpg")

        assert persisted.id == hashlib.sha256(b"jpeg data").hexdigest()
        assert loaded.id == persisted.id
        assert "static/media/new.jpg" in [m.path for m in memory_backend.get_media()]

    def test_delete_files(self, memory_backend):
        memory_backend.delete_files(["content/posts/second.md"], "Delete second")
        entries = memory_backend.entries_by_folder("content/posts", "md")
        assert [e.file.path for e in entries] == ["content/posts/hello-world.md"]


class TestDraftLifecycle:
    """Drafts move through the workflow on their own branches."""

    def test_draft_is_one_changeset_on_its_branch(self, memory_backend, memory_api):
        commits_before = len(memory_api.commits)

        memory_backend.persist_entry(new_post("launch"), draft_options("launch"))

        assert len(memory_api.commits) == commits_before + 1
        commit = memory_api.commits[-1]
        assert commit.branch == "cms/posts/launch"
        assert commit.paths == ["content/posts/launch.md", "static/media/launch.png"]

    def test_create_review_publish(self, memory_backend):
        memory_backend.persist_entry(new_post("launch", "Launch day"), draft_options("launch"))

        assert memory_backend.unpublished_entries() == ["posts/launch"]
        draft = memory_backend.unpublished_entry(collection="posts", slug="launch")
        assert draft.status == WorkflowStatus.DRAFT
        assert [d.path for d in draft.media_files(memory_backend.media_folder)] == [
            "static/media/launch.png"
        ]
        assert memory_backend.unpublished_entry_data_file(
            "posts", "launch", "content/posts/launch.md"
        ) == "Launch day"
        media = memory_backend.load_entry_media_files(
            memory_backend.get_branch("posts", "launch"),
            [
                UnpublishedEntryMediaFile(path=d.path, id=d.id)
                for d in draft.media_files(memory_backend.media_folder)
            ],
        )
        assert media[0].file.data == b"png:launch"

        memory_backend.update_unpublished_entry_status(
            "posts", "launch", WorkflowStatus.PENDING_PUBLISH.value
        )
        assert memory_backend.unpublished_entry(id="posts/launch").status == "pending_publish"

        memory_backend.publish_unpublished_entry("posts", "launch")

        assert memory_backend.unpublished_entries() == []
        assert memory_backend.get_entry("content/posts/launch.md").data == "Launch day"

    def test_nested_collection_draft(self, memory_backend):
        entry = Entry(data_files=[DataFile(path="content/blog/posts/a.md", slug="a", raw="A")])
        options = PersistOptions(
            commit_message="Create blog/posts a",
            new_entry=True,
            use_workflow=True,
            collection_name="blog/posts",
        )

        memory_backend.persist_entry(entry, options)

        assert memory_backend.unpublished_entries() == ["blog/posts/a"]
        draft = memory_backend.unpublished_entry(collection="blog/posts", slug="a")
        assert (draft.collection, draft.slug) == ("blog/posts", "a")

        memory_backend.publish_unpublished_entry("blog/posts", "a")
        assert memory_backend.get_entry("content/blog/posts/a.md").data == "A"

    def test_delete_draft(self, memory_backend):
        memory_backend.persist_entry(new_post("scrap"), draft_options("scrap"))

        memory_backend.delete_unpublished_entry("posts", "scrap")

        assert memory_backend.unpublished_entries() == []
        entries = memory_backend.entries_by_folder("content/posts", "md")
        assert "content/posts/scrap.md" not in [e.file.path for e in entries]

    def test_deploy_preview(self, memory_backend, memory_api):
        memory_backend.persist_entry(new_post("launch"), draft_options("launch"))
        assert memory_backend.get_deploy_preview("posts", "launch") is None

        memory_api.add_status(
            "posts",
            "launch",
            StatusRecord(context="deploy/preview", target_url="https://pr-1.example", state="success"),
        )

        assert memory_backend.get_deploy_preview("posts", "launch") == DeployStatus(
            url="https://pr-1.example", state="success"
        )

    def test_deploy_preview_for_unknown_draft(self, memory_backend):
        assert memory_backend.get_deploy_preview("posts", "missing") is None

    def test_concurrent_transitions_on_many_drafts(self, memory_backend):
        slugs = [f"post-{i}" for i in range(6)]
        for slug in slugs:
            memory_backend.persist_entry(new_post(slug), draft_options(slug))

        errors = []

        def advance(slug):
            try:
                memory_backend.update_unpublished_entry_status(
                    "posts", slug, WorkflowStatus.PENDING_REVIEW.value
                )
                memory_backend.publish_unpublished_entry("posts", slug)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=advance, args=(slug,)) for slug in slugs]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert memory_backend.unpublished_entries() == []
        published = {e.file.path for e in memory_backend.entries_by_folder("content/posts", "md")}
        assert {f"content/posts/{slug}.md" for slug in slugs} <= published

    def test_display_url_for_draft_media_is_revocable(self, memory_backend):
        url = memory_backend.get_media_display_url(DisplayURL(id=None, path="static/media/logo.png"))
        assert memory_backend.revoke_display_url(url) is True
