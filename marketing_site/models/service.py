from pydantic import BaseModel
from typing import List


class ServiceOffering(BaseModel):
    id: str
    name: str
    description: str
    startingPrice: int
    currency: str = "PHP"
    features: List[str] = []
