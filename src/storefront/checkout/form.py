"""Shipping details collected on the checkout form."""

from pydantic import BaseModel, Field


class ShippingForm(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=254)
    phone: str = Field(..., min_length=1, max_length=50)
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "full_name": "Ada Lovelace",
                    "email": "ada@example.com",
                    "phone": "+44 20 7946 0000",
                    "address": "12 St James's Square",
                    "city": "London",
                    "state": "Greater London",
                    "zip_code": "SW1Y 4JH",
                    "country": "United Kingdom",
                }
            ]
        }
    }

    def to_address(self) -> dict:
        """The address snapshot stored on the order. The email is contact-only."""
        return self.model_dump(exclude={"email"})
