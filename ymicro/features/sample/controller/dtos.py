from pydantic import BaseModel, Field


class SampleGreetingRequest(BaseModel):
    """问候接口的请求体"""
    name: str = Field(min_length=1, description="被问候者的名字", examples=["Xavier"])


class SampleGreetingResponse(BaseModel):
    """问候接口的响应体"""
    greeting: str = Field(description="问候文本", examples=["Hello, Xavier!"])


class NewGreetingRequest(BaseModel):
    """添加问候语接口的请求体"""
    greeting: str = Field(min_length=1, max_length=32, description="新的问候语", examples=["Hello"])
