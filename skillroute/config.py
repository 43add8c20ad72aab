from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Catalog
    skills_dir: str = "./skills"
    skill_filename: str = "SKILL.md"
    load_workers: int = 4

    # Routing
    max_hops: int = 1

    # Compliance
    required_sections: list[str] = [
        "Core Question",
        "Review Checklist",
        "Verification Commands",
        "Related Skills",
    ]
    description_max_chars: int = 200

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = ""  # Empty means INFO, or DEBUG when debug is on

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
