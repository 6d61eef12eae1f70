import pytest
from linkedin_publisher.core import IdentityResolver, PostPublisher
from linkedin_publisher.errors import ContentTooLong, EmptyContent, IdentityMissing
from linkedin_publisher.models import FailureReason, PostRequest

@pytest.mark.asyncio
async def test_publish_success(linkedin, identity):
    publisher = PostPublisher("tok1", base_url=linkedin.base_url)

    result = await publisher.publish(identity, "Hello world")

    assert result.success is True
    assert result.status == 201
    assert result.post_id == "urn:li:share:1"

@pytest.mark.asyncio
async def test_publish_payload_and_headers(linkedin, identity):
    publisher = PostPublisher("tok1", base_url=linkedin.base_url, api_version="202506")

    await publisher.publish(identity, "Hello world")

    method, path, headers, payload = linkedin.calls[0]
    assert (method, path) == ('POST', '/v2/posts')
    assert headers['authorization'] == 'Bearer tok1'
    assert headers['linkedin-version'] == '202506'
    assert headers['content-type'] == 'application/json'
    assert payload == {
        "author": "urn:li:person:999",
        "lifecycleState": "PUBLISHED",
        "visibility": "PUBLIC",
        "commentary": "Hello world",
        "distribution": {
            "feedDistribution": "MAIN_FEED",
            "targetEntities": [],
            "thirdPartyDistributionChannels": []
        }
    }

@pytest.mark.asyncio
async def test_publish_unexpected_status(linkedin, identity):
    linkedin.post_status = 403
    publisher = PostPublisher("tok1", base_url=linkedin.base_url)

    result = await publisher.publish(identity, "Hello world")

    assert result.success is False
    assert result.reason == FailureReason.PUBLISH_FAILED
    assert result.status == 403
    assert result.message == "unexpected status"

@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", "\n\t "])
async def test_blank_content_makes_no_call(linkedin, identity, text):
    publisher = PostPublisher("tok1", base_url=linkedin.base_url)

    result = await publisher.publish(identity, text)

    assert result.reason == FailureReason.EMPTY_CONTENT
    assert linkedin.calls == []

@pytest.mark.asyncio
async def test_missing_identity_makes_no_call(linkedin):
    publisher = PostPublisher("tok1", base_url=linkedin.base_url)

    result = await publisher.publish(None, "Hello world")

    assert result.success is False
    assert result.reason == FailureReason.IDENTITY_MISSING
    assert linkedin.calls == []

@pytest.mark.asyncio
async def test_content_over_limit_makes_no_call(linkedin, identity):
    publisher = PostPublisher("tok1", base_url=linkedin.base_url)

    result = await publisher.publish(identity, "x" * 3001)

    assert result.reason == FailureReason.CONTENT_TOO_LONG
    assert linkedin.calls == []

@pytest.mark.asyncio
async def test_content_at_limit_is_published(linkedin, identity):
    publisher = PostPublisher("tok1", base_url=linkedin.base_url)

    result = await publisher.publish(identity, "x" * 3000)

    assert result.success is True

@pytest.mark.asyncio
async def test_transport_error(unreachable_base_url, identity):
    publisher = PostPublisher("tok1", base_url=unreachable_base_url)

    result = await publisher.publish(identity, "Hello world")

    assert result.success is False
    assert result.reason == FailureReason.TRANSPORT_ERROR
    assert result.message

@pytest.mark.asyncio
async def test_undecodable_error_body(linkedin, identity):
    linkedin.post_status = 500
    linkedin.post_error_body = b"\xff\xfe\xfa"
    publisher = PostPublisher("tok1", base_url=linkedin.base_url)

    result = await publisher.publish(identity, "Hello world")

    assert result.success is False
    assert result.reason == FailureReason.PUBLISH_FAILED
    assert result.status == 500

@pytest.mark.asyncio
async def test_token_with_control_characters_is_not_sent(linkedin, identity):
    publisher = PostPublisher("tok\nX-Injected: 1", base_url=linkedin.base_url)

    result = await publisher.publish(identity, "Hello world")

    assert result.success is False
    assert result.reason == FailureReason.TRANSPORT_ERROR
    assert linkedin.calls == []

@pytest.mark.asyncio
async def test_publish_is_not_idempotent(linkedin, identity):
    """Publishing the same text twice creates two posts."""
    publisher = PostPublisher("tok1", base_url=linkedin.base_url)

    first = await publisher.publish(identity, "Hello world")
    second = await publisher.publish(identity, "Hello world")

    assert first.success and second.success
    assert len(linkedin.posts) == 2
    assert first.post_id != second.post_id

@pytest.mark.asyncio
async def test_resolve_then_publish(linkedin):
    """tok1 resolves to urn:li:person:999, then publishing succeeds."""
    resolver = IdentityResolver(base_url=linkedin.base_url)
    identity = await resolver.resolve("tok1", None)
    assert identity.urn == "urn:li:person:999"

    result = await PostPublisher("tok1", base_url=linkedin.base_url).publish(identity, "Hello world")

    assert result.success is True
    assert linkedin.posts[0]["author"] == "urn:li:person:999"

def test_build_request_preconditions(identity):
    publisher = PostPublisher("tok1", base_url="http://localhost")

    with pytest.raises(IdentityMissing):
        publisher.build_request(None, "text")
    with pytest.raises(EmptyContent):
        publisher.build_request(identity, " ")
    with pytest.raises(ContentTooLong):
        publisher.build_request(identity, "x" * 3001)

def test_post_request_rejects_long_commentary(identity):
    with pytest.raises(ValueError):
        PostRequest.for_identity(identity, "x" * 3001)
