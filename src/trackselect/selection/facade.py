"""Selection facade.

TrackSelector binds the resolvers to their collaborators (configuration,
subtitle discovery, renderer languages, mutators) and fills in the audio
and subtitle tracks of a playback request.
"""

from __future__ import annotations

import logging
from pathlib import Path

from trackselect.config.models import RendererConfig, SelectionConfig
from trackselect.domain import AudioTrack, MediaItem, OutputParams, SubtitleTrack
from trackselect.language import CodeMatcher, match_language_code
from trackselect.logging.context import selection_context
from trackselect.plugin.events import SelectionContext
from trackselect.plugin.registry import MutatorRegistry
from trackselect.selection import audio as audio_resolver
from trackselect.selection import subtitles as subtitle_resolver
from trackselect.selection.discovery import NullSubtitleDiscovery
from trackselect.selection.exceptions import ensure_playable
from trackselect.selection.interfaces import (
    ConfigProvider,
    RendererLanguageSource,
    SubtitleDiscovery,
)

logger = logging.getLogger(__name__)


class StaticConfigProvider:
    """Serves one configuration and language list to every renderer."""

    def __init__(
        self,
        config: SelectionConfig | None = None,
        renderer_languages: str | None = None,
    ) -> None:
        self._config = config if config is not None else SelectionConfig()
        self._languages = (
            renderer_languages
            if renderer_languages is not None
            else RendererConfig().languages
        )

    def config_for(self, renderer: str | None) -> SelectionConfig:
        return self._config

    def languages_for(self, renderer: str | None) -> str:
        return self._languages


class TrackSelector:
    """Chooses audio and subtitle tracks for playback requests.

    Args:
        config_provider: Resolves the selection configuration per renderer.
            Defaults to the built-in defaults for every renderer.
        discovery: External subtitle discovery. Defaults to one that finds
            nothing.
        renderer_languages: Source of renderer subtitle languages. Defaults
            to config_provider when it can serve languages too.
        matcher: Language code equivalence predicate.
        mutators: Mutator chain run over every applied selection.
    """

    def __init__(
        self,
        config_provider: ConfigProvider | None = None,
        discovery: SubtitleDiscovery | None = None,
        renderer_languages: RendererLanguageSource | None = None,
        matcher: CodeMatcher = match_language_code,
        mutators: MutatorRegistry | None = None,
    ) -> None:
        self._config_provider = config_provider or StaticConfigProvider()
        self._discovery = discovery or NullSubtitleDiscovery()
        if renderer_languages is None:
            if isinstance(self._config_provider, RendererLanguageSource):
                renderer_languages = self._config_provider
            else:
                renderer_languages = StaticConfigProvider()
        self._renderer_languages = renderer_languages
        self._matcher = matcher
        self._mutators = mutators if mutators is not None else MutatorRegistry()

    @property
    def mutators(self) -> MutatorRegistry:
        return self._mutators

    def resolve_audio(
        self, media: MediaItem | None, renderer: str | None = None
    ) -> AudioTrack | None:
        """Pick the audio track using the renderer's configuration."""
        config = self._config_provider.config_for(renderer)
        return audio_resolver.resolve_audio(media, config, self._matcher)

    def resolve_subtitle(
        self,
        file_ref: Path | str | None,
        media: MediaItem | None,
        renderer: str | None,
        audio_language: str | None,
        force_refresh: bool = False,
    ) -> SubtitleTrack | None:
        """Pick the subtitle track using the renderer's configuration."""
        config = self._config_provider.config_for(renderer)
        return subtitle_resolver.resolve_subtitle(
            file_ref,
            media,
            self._renderer_languages.languages_for(renderer),
            audio_language,
            force_refresh,
            config,
            discovery=self._discovery,
            matcher=self._matcher,
        )

    def apply_selection(
        self,
        file_ref: Path | str | None,
        media: MediaItem | None,
        params: OutputParams | None,
    ) -> None:
        """Fill in the audio and subtitle tracks of params.

        Tracks the caller already assigned are respected: audio is resolved
        only when missing, a subtitle with the "no subtitles" id is cleared,
        a pre-assigned subtitle with language "off" means no subtitles, and a
        live-fetch subtitle is kept untouched. The mutator chain then gets a
        chance to adjust the outcome before it is written back.

        Raises:
            SelectionInvariantError: If a resolver produced a subtitle with
                language "off".
        """
        if params is None:
            return

        with selection_context(file_ref, params.renderer):
            if params.audio is None:
                params.audio = self.resolve_audio(media, params.renderer)

            subtitle = params.subtitle
            if subtitle is not None and subtitle.is_no_subtitles_marker:
                logger.debug("Subtitles explicitly disabled for this request")
                params.subtitle = None
            elif subtitle is not None and subtitle.is_off:
                logger.debug(
                    'Pre-assigned subtitles track %s has language "off", '
                    "using no subtitles",
                    subtitle.id,
                )
                params.subtitle = None
            elif subtitle is not None and subtitle.requires_live_fetch:
                logger.debug("Keeping live-fetch subtitles track: %s", subtitle)
            elif subtitle is None:
                audio_language = params.audio.language if params.audio else None
                params.subtitle = self.resolve_subtitle(
                    file_ref, media, params.renderer, audio_language
                )

            result = params.as_result()
            if len(self._mutators):
                context = SelectionContext(
                    file_ref=file_ref,
                    media=media,
                    renderer=params.renderer,
                    config=self._config_provider.config_for(params.renderer),
                )
                result = self._mutators.apply(context, result)
            result = ensure_playable(result)
            params.audio = result.audio
            params.subtitle = result.subtitle
            logger.debug(
                "Selected audio %s and subtitles %s", params.audio, params.subtitle
            )


def apply_selection(
    file_ref: Path | str | None,
    media: MediaItem | None,
    params: OutputParams | None,
    config: SelectionConfig | None = None,
) -> None:
    """Fill in params with a default TrackSelector.

    Uses config (or the built-in defaults) for every renderer and performs
    no external subtitle discovery.
    """
    TrackSelector(StaticConfigProvider(config)).apply_selection(
        file_ref, media, params
    )
