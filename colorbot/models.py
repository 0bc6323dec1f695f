# SPDX-License-Identifier: MIT
"""A module containing base classes for models and controllers.

A model owns a piece of persisted state. The state is stored as bytes
in the `data/<model_name>.json` file, where the model name is derived
from the class name (see :meth:`PathUtils.convert_classname_to_filename`).

Examples
-------- ::

    class ClassModel(Model):
        def load(self, data: bytes | None) -> None:
            ...

        def save(self) -> bytes:
            ...

    class ClassController(Controller):
        model: ClassModel
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from .console import Console
from .errors import SerializationError
from .utils import PathUtils


class Model(ABC):
    """Base class for Model classes.

    Subclasses implement :meth:`load` and :meth:`save`,
    which convert the state from and to bytes.
    :meth:`load_from_file` and :meth:`save_to_file`
    are the hooks called by the cogs.
    """

    __slots__ = ()

    @property
    def _data_directory(self) -> Path:
        directory = Path("data/")
        if not directory.exists():
            directory.mkdir(parents=True)
            Console.warn(f"The directory '{directory}' has been created.")
        return directory

    @property
    def _data_name(self) -> str:
        return PathUtils.convert_classname_to_filename(self)

    @property
    def _data_path(self) -> Path:
        path = self._data_directory / f"{self._data_name}.json"
        if not path.exists():
            path.write_bytes(b"{}")
            Console.warn(f"The file '{path}' has been created.")
        return path

    @abstractmethod
    def load(self, data: bytes | None) -> None:
        """Restores the state from bytes produced by :meth:`save`."""

    @abstractmethod
    def save(self) -> bytes:
        """Returns the state as bytes.

        Raises
        ------
        SerializationError
            The state cannot be serialized.
        """

    def load_from_file(self) -> None:
        """Reads the data file and passes its content to :meth:`load`.

        An unreadable file is logged and the current state is kept.
        """
        try:
            data = self._data_path.read_bytes()
        except OSError as e:
            Console.warn(f"Cannot read the {self._data_name} data.", exception=e)
            return
        self.load(data)

    def save_to_file(self) -> bool:
        """Writes the result of :meth:`save` to the data file.

        Returns
        -------
        :class:`bool`
            Whether the state has been saved.
        """
        try:
            data = self.save()
            self._data_path.write_bytes(data)
        except (OSError, SerializationError) as e:
            Console.error(f"Cannot save the {self._data_name} data.", exception=e)
            return False
        return True


@dataclass(slots=True)
class Controller(ABC):
    """Base class for Controller classes.

    Attributes
    ----------
    model: :class:`.Model`
        The model of the function.
    """

    model: Model
