from memberdir_core.entry import Body, Entry, Member, Sibling, body_message, member_message, make_entry
from conftest import NOW


def test_wire_shape(authority):
    e = make_entry(authority, "M", "v1", "hello", NOW)
    d = e.to_dict()
    assert set(d) == {"masterKey", "member", "body"}
    assert set(d["member"]) == {"key", "metadata", "signature"}
    assert set(d["body"]) == {"data", "timestamp", "signature"}
    assert Entry.from_dict(d) == e


def test_from_dict_tolerates_missing_sections():
    e = Entry.from_dict({})
    assert e == Entry()
    assert e.body.timestamp == 0

    e = Entry.from_dict({"masterKey": "k", "member": "oops", "body": None})
    assert e.authority_key == "k"
    assert e.member == Member()


def test_signed_messages_are_plain_concatenation():
    m = Member(key="abc", metadata="v1", signature="SIG")
    assert member_message(m) == "abcv1"
    assert body_message("SIG", Body(data="hello", timestamp=NOW)) == f"SIGhello{NOW}"
    # no separator: these two claims sign the same bytes
    assert member_message(Member(key="ab", metadata="cv1")) == member_message(m)


def test_make_entry_reuses_member_signature(authority):
    first = make_entry(authority, "M", "v1", "one", NOW)
    second = make_entry(authority, "M", "v1", "two", NOW + 1, member_signature=first.member.signature)
    assert second.member == first.member
    assert second.body.signature != first.body.signature


def test_sibling_roundtrip_drops_authority(authority):
    e = make_entry(authority, "M", "v1", "hello", NOW)
    s = e.to_sibling()
    assert Sibling.from_dict(s.to_dict()) == s
    assert "masterKey" not in s.to_dict()
