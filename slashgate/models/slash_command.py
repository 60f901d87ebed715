from urllib.parse import parse_qs

from pydantic import BaseModel, ConfigDict


class SlashCommand(BaseModel):
    """
    A parsed Slack slash command.

    Slack sends an application/x-www-form-urlencoded POST; every field is
    carried through as-is. All fields default to empty, so SlashCommand()
    is the "nothing here" value.
    """

    model_config = ConfigDict(frozen=True)

    token:                 str  = ""
    team_id:               str  = ""
    team_domain:           str  = ""
    enterprise_id:         str  = ""
    enterprise_name:       str  = ""
    is_enterprise_install: bool = False
    channel_id:            str  = ""
    channel_name:          str  = ""
    user_id:               str  = ""
    user_name:             str  = ""
    command:               str  = ""
    text:                  str  = ""
    response_url:          str  = ""
    trigger_id:            str  = ""
    api_app_id:            str  = ""

    @classmethod
    def from_form(cls, raw_body: bytes) -> "SlashCommand":
        """
        Builds a command from a raw form body.

        Unknown keys are ignored; repeated keys keep the first value.
        Raises UnicodeDecodeError for bodies that are not UTF-8.
        """
        params = parse_qs(raw_body.decode("utf-8"), keep_blank_values=True)

        def get(key: str) -> str:
            return params.get(key, [""])[0]

        fields = {name: get(name) for name in cls.model_fields if name != "is_enterprise_install"}
        fields["is_enterprise_install"] = get("is_enterprise_install").lower() == "true"
        return cls(**fields)
