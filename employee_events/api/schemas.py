from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class ErrorInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    url_query_string: str | None = None
    http_method: str
    http_status: str
    http_status_code: int
    error_date_time: datetime
    error_message: str | None = None
