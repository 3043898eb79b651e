"""Actions compiled into the CLI."""

from __future__ import annotations

from .types import ActionContext, ActionDefinition

DEFAULT_TRANSLATE_LANGUAGE = "English"


async def _summary(ctx: ActionContext) -> str:
    return await ctx.ai.summarize(ctx.text)


async def _explain(ctx: ActionContext) -> str:
    return await ctx.ai.explain(ctx.text)


async def _translate(ctx: ActionContext) -> str:
    language = ctx.args[0] if ctx.args else DEFAULT_TRANSLATE_LANGUAGE
    return await ctx.ai.translate(ctx.text, language)


async def _improve(ctx: ActionContext) -> str:
    return await ctx.ai.improve(ctx.text)


async def _extract(ctx: ActionContext) -> str:
    return await ctx.ai.extract_data(ctx.text)


async def _tldr(ctx: ActionContext) -> str:
    return await ctx.ai.tldr(ctx.text)


async def _classify(ctx: ActionContext) -> str:
    return await ctx.ai.classify(ctx.text)


BUILTIN_ACTIONS: tuple[ActionDefinition, ...] = (
    ActionDefinition(
        id="summary",
        aliases=("summarize", "sum"),
        description="Summarize clipboard content",
        progress_message="Summarizing clipboard content...",
        output_title="Summary",
        run=_summary,
    ),
    ActionDefinition(
        id="explain",
        description="Explain clipboard content (good for code)",
        progress_message="Explaining clipboard content...",
        output_title="Explanation",
        run=_explain,
    ),
    ActionDefinition(
        id="translate",
        description="Translate clipboard to target language",
        progress_message="Translating clipboard content...",
        output_title="Translation",
        run=_translate,
    ),
    ActionDefinition(
        id="improve",
        description="Improve writing in clipboard",
        progress_message="Improving writing...",
        output_title="Improved",
        run=_improve,
    ),
    ActionDefinition(
        id="extract",
        description="Extract structured data from clipboard",
        progress_message="Extracting structured data...",
        output_title="Extracted Data",
        run=_extract,
    ),
    ActionDefinition(
        id="tldr",
        description="Get a very brief summary (1-2 sentences)",
        output_title="TL;DR",
        run=_tldr,
    ),
    ActionDefinition(
        id="classify",
        description="Classify clipboard content by type",
        progress_message="Classifying clipboard content...",
        output_title="Classification",
        run=_classify,
    ),
)
