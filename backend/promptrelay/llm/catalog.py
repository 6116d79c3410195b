"""Models advertised by ``GET /api/ai/models``."""

from typing import List

from ..models.ai import ModelInfo

MODEL_CATALOG: List[ModelInfo] = [
    ModelInfo(
        id="xiaomi/mimo-v2-flash:free",
        name="MiMo-V2-Flash",
        description="Xiaomi's 309B MoE model, excels at reasoning and coding",
        context_length=262144,
    ),
    ModelInfo(
        id="nvidia/nemotron-3-nano-30b-a3b:free",
        name="Nemotron 3 Nano 30B",
        description="NVIDIA's efficient 30B MoE for agentic AI systems",
        context_length=256000,
    ),
    ModelInfo(
        id="mistralai/devstral-2512:free",
        name="Devstral 2",
        description="Mistral's 123B coding specialist with 256K context",
        context_length=262144,
    ),
    ModelInfo(
        id="nex-agi/deepseek-v3.1-nex-n1:free",
        name="DeepSeek V3.1 Nex N1",
        description="Nex AGI's flagship model for agent autonomy and tool use",
        context_length=131072,
    ),
    ModelInfo(
        id="kwaipilot/kat-coder-pro:free",
        name="KAT-Coder-Pro V1",
        description="KwaiKAT's advanced agentic coding model",
        context_length=256000,
    ),
]
