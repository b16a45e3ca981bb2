from app.commands.extraction import (
    extract_call_message,
    extract_data,
    extract_headers,
    extract_http_method,
    extract_phone_number,
    extract_url,
)
from app.models.commands import (
    API_REQUEST,
    GENERIC,
    HELP,
    PHONE_CALL,
    STATUS,
    WORKFLOW,
    CommandIntent,
)
from app.outbound.simulated import DEFAULT_CALL_MESSAGE


class CommandClassifier:
    keywords = (
        (PHONE_CALL, ("call", "phone")),
        (API_REQUEST, ("api", "request", "curl")),
        (WORKFLOW, ("workflow", "automate")),
        (STATUS, ("status", "health")),
        (HELP, ("help", "commands")),
    )

    def match_kind(self, message: str) -> str:
        lowered = message.lower().strip()
        for kind, words in self.keywords:
            if any(word in lowered for word in words):
                return kind
        return GENERIC

    def classify(self, message: str) -> CommandIntent:
        text = message or ""
        kind = self.match_kind(text)

        if kind == PHONE_CALL:
            phone_number = extract_phone_number(text)
            if not phone_number:
                return CommandIntent(kind=kind, text=text)
            return CommandIntent(
                kind=kind,
                text=text,
                phone_number=phone_number,
                call_message=extract_call_message(text) or DEFAULT_CALL_MESSAGE,
            )

        if kind == API_REQUEST:
            url = extract_url(text)
            if not url:
                return CommandIntent(kind=kind, text=text)
            return CommandIntent(
                kind=kind,
                text=text,
                url=url,
                method=extract_http_method(text) or "GET",
                headers=extract_headers(text),
                data=extract_data(text),
            )

        return CommandIntent(kind=kind, text=text)
