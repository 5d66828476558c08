"""Message management — submit, update and delete commands and handlers."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from contact.domain import contact
from contact.message.message import Message


@contact.command(part_of="Message")
class SubmitMessage:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    phone = String(max_length=30)
    subject = String(required=True, max_length=200)
    body = String(required=True, max_length=2000)
    priority = String(max_length=10)


@contact.command(part_of="Message")
class UpdateMessage:
    message_id = Identifier(required=True)
    status = String(max_length=10)
    priority = String(max_length=10)
    notes = String(max_length=1000)


@contact.command(part_of="Message")
class DeleteMessage:
    message_id = Identifier(required=True)


@contact.command_handler(part_of=Message)
class ManageMessageHandler:
    @handle(SubmitMessage)
    def submit_message(self, command):
        message = Message.submit(
            name=command.name,
            email=command.email,
            phone=command.phone,
            subject=command.subject,
            body=command.body,
            priority=command.priority,
        )
        current_domain.repository_for(Message).add(message)
        return str(message.id)

    @handle(UpdateMessage)
    def update_message(self, command):
        repo = current_domain.repository_for(Message)
        message = repo.get(command.message_id)

        if command.status is not None:
            message.change_status(command.status)
        message.triage(priority=command.priority, notes=command.notes)

        repo.add(message)

    @handle(DeleteMessage)
    def delete_message(self, command):
        repo = current_domain.repository_for(Message)
        message = repo.get(command.message_id)
        repo._dao.delete(message)
