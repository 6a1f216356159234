from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

	database_url: str
	sql_echo: bool = False

	# bot; only needed to start polling
	bot_token: str | None = None
	admin_ids: str | None = None

	# listing
	page_size: int = 10

	log_level: str = "INFO"

	def admin_id_set(self) -> set[int]:
		if not self.admin_ids:
			return set()
		return {int(x.strip()) for x in self.admin_ids.split(",") if x.strip()}


settings = Settings()  # type: ignore[arg-type]
