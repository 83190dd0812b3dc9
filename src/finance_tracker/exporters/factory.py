import importlib
import logging
from typing import Optional, Dict, Type, Any
from finance_tracker.exporters.base import Exporter
from finance_tracker.config.settings import ConfigLoader

logger = logging.getLogger(__name__)

class ExporterFactory:
    """
    Factory for creating summary exporters.

    Uses a registry pattern to map format names to Exporter classes.
    """

    _locked = False
    _registry: Dict[str, Type[Exporter]] = {}

    @classmethod
    def register(cls, fmt: str, exporter_class: Type[Exporter]) -> None:
        """
        Register an exporter for an output format

        Args:
            fmt: Unique format name (e.g, 'xlsx', 'pdf')
            exporter_class: The exporter class

        Raises:
            ValueError: If the format is already registered
            TypeError: If exporter_class doesn't inherit from Exporter
            RuntimeError: If the registry is locked

        Example:
            ExporterFactory.register('xlsx', ExcelExporter)
        """
        if cls._locked:
            raise RuntimeError("Registry is locked, cannot add more exporters")

        if fmt in cls._registry:
            raise ValueError(f"Exporter for '{fmt}' is already registered")

        if not isinstance(exporter_class, type) or not issubclass(exporter_class, Exporter):
            raise TypeError(f"{exporter_class} must inherit from Exporter")

        cls._registry[fmt] = exporter_class

    @classmethod
    def lock_registry(cls):
        """Prevent further registration (call after app initialization)"""
        cls._locked = True

    @classmethod
    def is_locked(cls) -> bool:
        return cls._locked

    @classmethod
    def create_exporter(cls, fmt: str) -> Exporter:
        """
        Create an exporter instance for the given format.

        Raises:
            ValueError: If no exporter is registered for this format

        Example:
            exporter = ExporterFactory.create_exporter('pdf')
            exporter.export(summary, 'report.pdf')
        """
        key = fmt.lower().lstrip(".")
        if key not in cls._registry:
            available = ', '.join(cls._registry.keys())
            raise ValueError(
                f"No exporter registered for '{fmt}'. "
                f"Available formats: {available}"
            )

        return cls._registry[key]()

    @classmethod
    def get_available_formats(cls) -> list[str]:
        """Return list of all registered format names"""
        return list(cls._registry.keys())

    @classmethod
    def load_exporters_from_config(
        cls,
        config: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Load and register exporters from configuration

        Args:
            config: Optional config dict. If None, loads from ConfigLoader.
                Useful for testing with custom configs.

            Example (testing):
                test_config = {"exporters": [...]}
                ExporterFactory.load_exporters_from_config(config=test_config)
        """
        if config is None:
            config = ConfigLoader.load_exporters_config()

        for exporter_config in config['exporters']:
            module_path, class_name = str(exporter_config['class']).rsplit('.', 1)
            module = importlib.import_module(module_path)
            exporter_class = getattr(module, class_name)

            cls.register(exporter_config['format'], exporter_class)
            logger.debug("Registered exporter %s for '%s'", class_name, exporter_config['format'])

        cls.lock_registry()
