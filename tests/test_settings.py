import pytest
from pydantic_settings import BaseSettings, SettingsConfigDict

from dicekit.container import Container
from dicekit.integrations.pydantic_settings import is_pydantic_settings_subclass, register_settings
from dicekit.lifetime import Lifetime
from dicekit.settings import DiceSettings


class _AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DICEKIT_TEST_APP_")

    name: str = "demo"


class TestDiceSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DICE_DEFAULT_LIFETIME", raising=False)

        assert DiceSettings().default_lifetime is Lifetime.GRAPH

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DICE_DEFAULT_LIFETIME", "transient")

        assert DiceSettings().default_lifetime is Lifetime.TRANSIENT

    def test_container_from_settings(self) -> None:
        container = Container.from_settings(DiceSettings(default_lifetime=Lifetime.WEAK))

        assert container.default_lifetime is Lifetime.WEAK

    def test_container_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DICE_DEFAULT_LIFETIME", "singleton")

        assert Container.from_settings().default_lifetime is Lifetime.SINGLETON


class TestPydanticSettingsRegistration:
    def test_is_pydantic_settings_subclass(self) -> None:
        assert is_pydantic_settings_subclass(_AppSettings)
        assert not is_pydantic_settings_subclass(_AppSettings())
        assert not is_pydantic_settings_subclass(int)
        assert not is_pydantic_settings_subclass("not-a-class")

    def test_settings_without_factory_default_to_singleton(self, container: Container) -> None:
        handle = container.register(_AppSettings)

        assert handle.binding.lifetime is Lifetime.SINGLETON
        assert container.resolve(_AppSettings) is container.resolve(_AppSettings)

    def test_explicit_lifetime_wins(self, container: Container) -> None:
        container.register(_AppSettings, lifetime=Lifetime.TRANSIENT)

        assert container.resolve(_AppSettings) is not container.resolve(_AppSettings)

    def test_settings_read_environment_at_registration(
        self,
        container: Container,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("DICEKIT_TEST_APP_NAME", "from-env")
        container.register(_AppSettings)
        monkeypatch.setenv("DICEKIT_TEST_APP_NAME", "changed")

        assert container.resolve(_AppSettings).name == "from-env"

    def test_register_settings_with_overrides(self, container: Container) -> None:
        register_settings(container, _AppSettings, name="override")

        assert container.resolve(_AppSettings).name == "override"

    def test_register_settings_with_qualifier(self, container: Container) -> None:
        register_settings(container, _AppSettings, qualifier="staging", name="staging")

        assert container.resolve(_AppSettings, "staging").name == "staging"
