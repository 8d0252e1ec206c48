"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from bolo.l1_entities.config import AppConfig
from bolo.l1_entities.language import Language
from bolo.l2_use_cases.ports.clipboard import Clipboard
from bolo.l2_use_cases.ports.config_loader import ConfigLoader
from bolo.l2_use_cases.ports.recognition_engine import EngineFactory
from bolo.l2_use_cases.ports.scheduler import Scheduler
from bolo.l3_interface_adapters.controllers.session_controller import SessionController
from bolo.l3_interface_adapters.gateways.asyncio_scheduler import AsyncioScheduler
from bolo.l3_interface_adapters.gateways.pyperclip_clipboard import PyperclipClipboard
from bolo.l3_interface_adapters.gateways.whisper_recognition_engine import WhisperEngineFactory
from bolo.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(
        self,
        config: AppConfig,
        language: Language | None = None,
        engine_factory: EngineFactory | None = None,
        scheduler: Scheduler | None = None,
        clipboard: Clipboard | None = None,
    ) -> None:
        self.config = config

        self.engine_factory: EngineFactory = engine_factory or WhisperEngineFactory(config.recognition)
        self.scheduler: Scheduler = scheduler or AsyncioScheduler()
        self.clipboard: Clipboard = clipboard or PyperclipClipboard()

        sc = config.session
        self.controller = SessionController(
            self.engine_factory,
            self.scheduler,
            language=language or sc.default_language,
            settle_delay=sc.settle_delay,
            restart_burst_limit=sc.restart_burst_limit,
            restart_burst_window=sc.restart_burst_window,
        )

    def close(self) -> None:
        """Release the shared whisper model, if one was loaded."""
        close = getattr(self.engine_factory, 'close', None)
        if close is not None:
            close()

    @staticmethod
    def config_loader() -> ConfigLoader:
        return YamlConfigLoader()
