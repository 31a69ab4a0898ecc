import pytest

from core.conversation_memory import RecipientMemory
from core.script_backend import RecordingBackend, ScriptResult
from handlers.send_message_handler import SendMessageHandler

CONTACTS = {"alvin": "Alvin Chen", "mary jane": "Mary Jane Watson"}


def contacts_responder(script: str) -> ScriptResult:
    """Answer contact lookups from CONTACTS; accept every other script."""
    if 'tell application "Contacts"' in script and "matchedPeople" in script:
        for key, full_name in CONTACTS.items():
            if f'starts with "{key}"' in script.lower():
                return ScriptResult(False, full_name)
        return ScriptResult(True, "No contact matches")
    return ScriptResult(False, "")


def run(handler: SendMessageHandler, command: str):
    invocation = handler.match(command)
    assert invocation is not None
    return handler.handle(command, invocation)


def test_tell_picks_longest_name_that_validates():
    backend = RecordingBackend(contacts_responder)
    handler = SendMessageHandler(backend)

    outcome = run(handler, "tell mary jane see you at noon")

    assert not outcome.is_error
    assert outcome.fields == {"recipient": "Mary Jane Watson", "message": "see you at noon"}
    lookups = [script for script in backend.scripts if "matchedPeople" in script]
    assert 'starts with "mary jane see"' in lookups[0]
    assert 'starts with "mary jane"' in lookups[1]
    assert 'send "see you at noon"' in backend.scripts[-1]
    assert handler.memory.last == "Mary Jane Watson"


def test_message_prefix_uses_tell_rules():
    handler = SendMessageHandler(RecordingBackend(contacts_responder))
    invocation = handler.match("Message alvin running late")
    assert invocation is not None and invocation.name == "message"
    assert invocation.parse("Message alvin running late") == {"recipient": "Alvin Chen", "message": "running late"}


def test_tell_without_known_contact_reports_missing_recipient():
    handler = SendMessageHandler(RecordingBackend(contacts_responder))
    outcome = run(handler, "tell nobody hello")
    assert outcome.is_error
    assert outcome.error_code == "missing_required_field"
    assert outcome.message == "No valid recipient specified"


def test_say_to_splits_on_last_to():
    handler = SendMessageHandler(RecordingBackend())
    invocation = handler.match("say hello there to alvin")
    assert invocation.name == "say_to"
    assert invocation.parse("say hello there to alvin") == {"recipient": "alvin", "message": "hello there"}
    assert invocation.parse("say go to the park to bob") == {"recipient": "bob", "message": "go to the park"}


def test_say_without_recipient_and_empty_memory_fails_without_backend_call():
    backend = RecordingBackend()
    handler = SendMessageHandler(backend)
    outcome = run(handler, "say nothing useful")
    assert outcome.is_error
    assert outcome.message == "No valid recipient specified"
    assert outcome.fields == {"recipient": None, "message": "nothing useful"}
    assert backend.scripts == []


def test_remembered_recipient_fills_in():
    memory = RecipientMemory()
    memory.remember("Alvin Chen")
    backend = RecordingBackend()
    handler = SendMessageHandler(backend, memory=memory)

    outcome = run(handler, "say see you soon")

    assert not outcome.is_error
    assert outcome.fields["recipient"] == "Alvin Chen"
    assert 'starts with "Alvin Chen"' in backend.scripts[-1]


@pytest.mark.parametrize("command", ["say to bob", "say hello to"])
def test_dangling_to_is_malformed(command):
    handler = SendMessageHandler(RecordingBackend())
    outcome = run(handler, command)
    assert outcome.is_error
    assert outcome.error_code == "malformed_input"
    assert outcome.handler == "send_message"


def test_empty_message_is_reported():
    handler = SendMessageHandler(RecordingBackend(contacts_responder))
    outcome = run(handler, "tell alvin")
    assert outcome.is_error
    assert outcome.message == "No message specified"


def test_backend_failure_does_not_update_memory():
    handler = SendMessageHandler(RecordingBackend(result=ScriptResult(True, "Messages is not running")))
    outcome = run(handler, "say hi to bob")
    assert tuple(outcome) == (True, "Messages is not running")
    assert outcome.error_code == "backend_error"
    assert handler.memory.last is None


def test_message_text_is_escaped():
    backend = RecordingBackend()
    handler = SendMessageHandler(backend)
    run(handler, 'say she said "hi" to bob')
    assert 'send "she said \\"hi\\"" to targetBuddy' in backend.scripts[-1]


def test_recipient_memory_ignores_blank_names():
    memory = RecipientMemory(max_entries=2)
    assert memory.last is None
    for name in ["Ann", "Bob", " "]:
        memory.remember(name)
    assert memory.remember("") is None
    assert memory.last == "Bob"
