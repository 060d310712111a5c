from pydantic import BaseModel, ConfigDict, EmailStr, Field
from .common import gen_id


class Client(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=gen_id)
    name: str
    company: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    billing_address: str | None = None
    delivery_address: str | None = None
    vat_number: str | None = None

    @property
    def display_name(self) -> str:
        return self.company or self.name
