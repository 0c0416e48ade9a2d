import os


class Pagination:
    def __init__(self, config: dict | None = None) -> None:
        page_cfg = (config or {}).get("mitter", {}).get("pagination", {})
        self.MAX_MESSAGE_LIST_LENGTH: int = int(
            page_cfg.get("max_message_list_length", os.getenv("MITTER_MAX_MESSAGE_LIST_LENGTH", "50"))
        )
        self.DEFAULT_PAGE_SIZE: int = int(
            page_cfg.get("default_page_size", os.getenv("MITTER_DEFAULT_PAGE_SIZE", str(self.MAX_MESSAGE_LIST_LENGTH)))
        )
        if self.MAX_MESSAGE_LIST_LENGTH < 1:
            raise ValueError("MITTER_MAX_MESSAGE_LIST_LENGTH must be >= 1")
        self.DEFAULT_PAGE_SIZE = max(1, min(self.DEFAULT_PAGE_SIZE, self.MAX_MESSAGE_LIST_LENGTH))
