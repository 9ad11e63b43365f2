from omni.access import AccessPolicy
from omni.gateway import BotIdentity, InboundMessage

BOT = BotIdentity(id="999", username="omni_bot")


def _msg(**overrides) -> InboundMessage:
    fields = {"channel": "telegram", "sender_id": "1", "chat_id": "-100", "content": "hi", "chat_type": "group"}
    fields.update(overrides)
    return InboundMessage(**fields)


def test_empty_allowlists_allow_everyone() -> None:
    policy = AccessPolicy(BOT)
    assert policy.is_user_allowed(_msg())
    assert policy.is_group_allowed(_msg())


def test_user_allowlist() -> None:
    policy = AccessPolicy(BOT, allowed_user_ids=["1", " 2 "])
    assert policy.is_user_allowed(_msg(sender_id="2"))
    assert not policy.is_user_allowed(_msg(sender_id="3"))
    assert policy.is_user_allowed(_msg(sender_id="3", system_event=True))


def test_group_allowlist_only_applies_to_groups() -> None:
    policy = AccessPolicy(BOT, allowed_groups=["-100"])
    assert policy.is_group_allowed(_msg())
    assert not policy.is_group_allowed(_msg(chat_id="-200", chat_type="supergroup"))
    assert policy.is_group_allowed(_msg(chat_id="42", chat_type="private"))


def test_mentions_and_replies() -> None:
    policy = AccessPolicy(BOT)

    assert policy.is_mentioned(_msg(mentions=["@Omni_Bot"]))
    assert policy.is_mentioned(_msg(content="hey @OMNI_BOT look"))
    assert not policy.is_mentioned(_msg(content="hey there"))

    reply = _msg(reply_to_sender_id="999")
    assert policy.is_reply_to_bot(reply)
    assert policy.is_bot_mentioned(reply)
    assert policy.is_reply_to_bot_without_mention(reply)
    assert not policy.is_reply_to_bot_without_mention(_msg(reply_to_sender_id="999", content="@omni_bot"))


def test_bot_without_username_is_never_mentioned() -> None:
    policy = AccessPolicy(BotIdentity(id="999"))
    assert not policy.is_mentioned(_msg(content="@anyone"))


def test_access_denied_reply_only_when_addressed_in_groups() -> None:
    policy = AccessPolicy(BOT, allowed_user_ids=["1"])
    assert policy.should_reply_access_denied(_msg(chat_type="private", chat_id="5"))
    assert not policy.should_reply_access_denied(_msg())
    assert policy.should_reply_access_denied(_msg(content="@omni_bot help"))


def test_mention_gate() -> None:
    policy = AccessPolicy(BOT, require_mention=True)
    assert not policy.passes_mention_gate(_msg())
    assert policy.passes_mention_gate(_msg(content="@omni_bot hi"))
    assert policy.passes_mention_gate(_msg(chat_type="private"))
    assert policy.passes_mention_gate(_msg(system_event=True))
    assert AccessPolicy(BOT).passes_mention_gate(_msg())


def test_lookalike_handle_is_not_a_mention() -> None:
    policy = AccessPolicy(BOT, require_mention=True)

    staging = _msg(content="@omni_bot_staging run this")
    assert not policy.is_mentioned(staging)
    assert not policy.passes_mention_gate(staging)
    assert not policy.is_mentioned(_msg(content="mail me at ops@omni_bot"))

    assert policy.is_mentioned(_msg(content="ping @omni_bot, thanks"))
    assert policy.is_mentioned(_msg(content="@omni_bot"))
