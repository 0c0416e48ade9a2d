import os


class Multipart:
    def __init__(self, config: dict | None = None) -> None:
        mp_cfg = (config or {}).get("mitter", {}).get("multipart", {})
        self.MESSAGE_NAME_KEY: str = str(
            mp_cfg.get("message_name_key", os.getenv("MITTER_MULTIPART_MESSAGE_NAME_KEY", "io.mitter.wire.requestbody"))
        )
        self.MESSAGE_FILE_NAME: str = str(
            mp_cfg.get(
                "message_file_name",
                os.getenv("MITTER_MULTIPART_MESSAGE_FILE_NAME", "io.mitter.wire.requestbody.json"),
            )
        )
