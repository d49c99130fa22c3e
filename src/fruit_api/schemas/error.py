from pydantic import BaseModel, ConfigDict, Field


class ErrorRecord(BaseModel):
    """
    Body of every error response:

        {"exceptionType": "ValidationError", "code": 422,
         "requestPath": "/fruits", "error": "Id was invalidly set on request."}

    `error` is left out entirely when the failure carried no message.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    exception_type: str = Field(alias="exceptionType")
    code: int
    request_path: str = Field(alias="requestPath")
    error: str | None = None

    def to_body(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
