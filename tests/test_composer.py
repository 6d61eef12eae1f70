import asyncio
import pytest
from linkedin_publisher.core import ComposerState, PostComposer, PostPublisher
from linkedin_publisher.models import FailureReason, PublishResult


def make_composer(base_url, identity, notices):
    return PostComposer(PostPublisher("tok1", base_url=base_url), identity, notify=notices)


def test_character_count(identity, notices):
    composer = make_composer("http://localhost", identity, notices)
    composer.set_content("Hello")

    assert composer.character_count == "5/3000 characters"
    assert composer.state == ComposerState.IDLE
    assert composer.submit_label == "Post to LinkedIn"

@pytest.mark.asyncio
async def test_submit_success_closes_composer(linkedin, identity, notices):
    composer = make_composer(linkedin.base_url, identity, notices)
    composer.set_content("Hello world")

    result = await composer.submit()

    assert result.success is True
    assert composer.state == ComposerState.PUBLISHED
    assert composer.closed is True
    assert notices.messages == ["Post published to LinkedIn successfully!"]

@pytest.mark.asyncio
async def test_whitespace_submit_stays_idle(linkedin, identity, notices):
    composer = make_composer(linkedin.base_url, identity, notices)
    composer.set_content("   ")

    result = await composer.submit()

    assert result.reason == FailureReason.EMPTY_CONTENT
    assert composer.state == ComposerState.IDLE
    assert composer.can_submit is True
    assert notices.messages == ["Please enter some content for your post"]
    assert linkedin.calls == []

@pytest.mark.asyncio
async def test_failure_allows_retry(linkedin, identity, notices):
    linkedin.post_status = 403
    composer = make_composer(linkedin.base_url, identity, notices)
    composer.set_content("Hello world")

    failed = await composer.submit()

    assert failed.status == 403
    assert composer.state == ComposerState.FAILED
    assert composer.can_submit is True
    assert notices.messages == ["Failed to post to LinkedIn: Failed to post: 403"]

    linkedin.post_status = 201
    retried = await composer.submit()

    assert retried.success is True
    assert composer.state == ComposerState.PUBLISHED
    assert len(linkedin.calls) == 2

@pytest.mark.asyncio
async def test_undecodable_error_body_allows_retry(linkedin, identity, notices):
    linkedin.post_status = 500
    linkedin.post_error_body = b"\xff\xfe\xfa"
    composer = make_composer(linkedin.base_url, identity, notices)
    composer.set_content("Hello world")

    failed = await composer.submit()

    assert failed.status == 500
    assert composer.state == ComposerState.FAILED
    assert composer.can_submit is True
    assert notices.messages == ["Failed to post to LinkedIn: Failed to post: 500"]

    linkedin.post_status = 201
    assert (await composer.submit()).success is True

@pytest.mark.asyncio
async def test_unexpected_publisher_error_fails_submit(identity, notices):
    class BrokenPublisher:
        async def publish(self, identity, text):
            raise RuntimeError("boom")

    composer = PostComposer(BrokenPublisher(), identity, notify=notices)
    composer.set_content("Hello world")

    result = await composer.submit()

    assert result.success is False
    assert result.reason == FailureReason.TRANSPORT_ERROR
    assert composer.state == ComposerState.FAILED
    assert composer.can_submit is True
    assert notices.messages == ["Failed to post to LinkedIn: boom"]

@pytest.mark.asyncio
async def test_submit_refused_while_submitting(identity, notices):
    release = asyncio.Event()

    class SlowPublisher:
        calls = 0

        async def publish(self, identity, text):
            SlowPublisher.calls += 1
            await release.wait()
            return PublishResult.ok()

    composer = PostComposer(SlowPublisher(), identity, notify=notices)
    composer.set_content("Hello world")

    first = asyncio.create_task(composer.submit())
    await asyncio.sleep(0)
    assert composer.state == ComposerState.SUBMITTING
    assert composer.submit_label == "Posting..."
    assert await composer.submit() is None

    release.set()
    assert (await first).success is True
    assert SlowPublisher.calls == 1

@pytest.mark.asyncio
async def test_dismissed_composer_finishes_silently(identity, notices):
    release = asyncio.Event()

    class SlowPublisher:
        async def publish(self, identity, text):
            await release.wait()
            return PublishResult.ok()

    composer = PostComposer(SlowPublisher(), identity, notify=notices)
    composer.set_content("Hello world")

    pending = asyncio.create_task(composer.submit())
    await asyncio.sleep(0)
    composer.close()
    release.set()
    result = await pending

    assert result.success is True
    assert notices.messages == []
