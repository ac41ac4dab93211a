"""
Model server settings and the Ollama generate contract
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class LLMSettings(BaseModel):
    """LLM Configuration Settings"""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_name: str = Field(default="llama3.2", description="LLM model name")
    base_url: str = Field(default="http://localhost:11434", description="Ollama base URL")
    timeout: Optional[float] = Field(default=None, gt=0, description="Request timeout in seconds, None waits forever")


class GenerationOptions(BaseModel):
    """Sampling options forwarded to /api/generate"""
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0, description="Generation temperature")
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0, description="Top-p sampling")
    max_tokens: Optional[int] = Field(default=None, ge=1, description="Maximum tokens to generate")


class InferenceRequest(BaseModel):
    """One generation call. `stream` records caller intent only; the gateway always sends false."""
    model_config = ConfigDict(protected_namespaces=())

    model_name: str
    prompt: str
    stream: bool = False
    options: Optional[GenerationOptions] = None


class OllamaResponse(BaseModel):
    """Non-streaming reply from /api/generate"""
    model: str = ""
    response: str = ""
    done: bool = True
    context: Optional[List[int]] = None
