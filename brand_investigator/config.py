from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Serper (required at run time)
    serper_api_key: str = ""
    serper_search_url: str = "https://google.serper.dev/search"

    # Gemini via its OpenAI-compatible endpoint (required at run time)
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    gemini_model: str = "gemini-2.0-flash"

    # Firecrawl (optional)
    firecrawl_api_key: str = ""
    firecrawl_scrape_url: str = "https://api.firecrawl.dev/v1/scrape"

    # RapidAPI LinkedIn profile data (optional)
    rapidapi_key: str = ""
    linkedin_profile_host: str = "fresh-linkedin-profile-data.p.rapidapi.com"

    # Investigation limits
    http_timeout_seconds: float = 30.0
    max_linkedin_profiles: int = 3
    max_analysis_results: int = 5
    max_enrichment_chars: int = 2000
    default_product_category: str = "products"

    # Persisted credential slots
    credential_store_path: str = ".cache/credentials.json"

    # App
    cors_origins: str = "http://localhost:3000"
    app_log_level: str = "INFO"
    noisy_log_level: str = "WARNING"
    log_dir: str = "logs"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]


settings = Settings()
