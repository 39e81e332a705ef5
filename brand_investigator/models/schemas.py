from __future__ import annotations

from pydantic import BaseModel

from brand_investigator.models.investigation import Credentials


# --- Requests ---


class CredentialsPayload(BaseModel):
    serper: str = ""
    gemini: str = ""
    firecrawl: str = ""
    rapidapi: str = ""

    def to_credentials(self) -> Credentials:
        return Credentials(
            serper=self.serper,
            gemini=self.gemini,
            firecrawl=self.firecrawl,
            rapidapi=self.rapidapi,
        )


class InvestigationRequest(BaseModel):
    brand_name: str
    product_category: str = ""
    credentials: CredentialsPayload | None = None


# --- Responses ---


class CredentialStatusResponse(BaseModel):
    serper: bool
    gemini: bool
    firecrawl: bool
    rapidapi: bool
