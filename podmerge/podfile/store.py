"""
Text File Store.

Synchronous whole-file text I/O used by the Podfile service. Every write
replaces the full file content.
"""

from pathlib import Path

from podmerge.podfile import PodfileError


class StoreError(PodfileError):
    """Raised when a file cannot be read, written or deleted."""

    pass


class FileStore:
    """Plain text file access on the local filesystem."""

    def exists(self, file_path: Path) -> bool:
        return Path(file_path).is_file()

    def read_text(self, file_path: Path) -> str:
        """
        Read a text file.

        Args:
            file_path: Path to the file

        Returns:
            File content

        Raises:
            StoreError: If the file cannot be read
        """
        try:
            with open(file_path, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError as e:
            raise StoreError(f"File not found: {file_path}") from e
        except Exception as e:
            raise StoreError(f"Failed to read file {file_path}: {e}") from e

    def read_text_if_exists(self, file_path: Path) -> str | None:
        if not self.exists(file_path):
            return None
        return self.read_text(file_path)

    def write_text(self, file_path: Path, content: str) -> None:
        """
        Write a text file, creating parent directories as needed.

        Raises:
            StoreError: If the file cannot be written
        """
        try:
            Path(file_path).parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "w", encoding="utf-8") as f:
                f.write(content)
        except Exception as e:
            raise StoreError(f"Failed to write file {file_path}: {e}") from e

    def delete(self, file_path: Path) -> None:
        """
        Delete a file. A missing file is not an error.

        Raises:
            StoreError: If the file cannot be deleted
        """
        try:
            Path(file_path).unlink(missing_ok=True)
        except Exception as e:
            raise StoreError(f"Failed to delete file {file_path}: {e}") from e
