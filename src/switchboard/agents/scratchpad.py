"""Scratchpad provider: file management inside a dedicated workspace directory.

Every path handed to these tools is interpreted relative to the scratchpad
root. Paths that resolve outside the root are rejected.
"""

import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from switchboard.agents.provider import CapabilityProvider
from switchboard.tools.builder import build_tool

logger = logging.getLogger(__name__)

SCRATCHPAD_PROMPT = """You are a file management assistant that helps organize and manage files in the scratchpad workspace.

About the Scratchpad:
- This is a dedicated workspace for notes, research, and temporary files
- Common directories include 'research/', 'notes/', 'temp/', etc.
- Markdown (.md) files are preferred for documentation

When handling files:
1. Check if directories exist before creating files
2. Use appropriate file extensions (.md for markdown, .txt for plain text)
3. Organize files logically by topic or purpose
4. Clean up temporary files when they're no longer needed"""


class ListFilesArgs(BaseModel):
    """List files in the scratchpad matching a pattern"""

    pattern: str = Field(
        description="File pattern to search for (e.g., '*.md' for markdown notes, 'research/*.txt' for research text files)"
    )
    recursive: bool = Field(
        description="Whether to search in subdirectories like 'research/' or 'notes/'"
    )


class CreateFileArgs(BaseModel):
    """Create a file in the scratchpad, creating parent directories as needed"""

    filename: str = Field(
        description="Name of the file to create (e.g., 'research/api_notes.md', 'notes/meeting_summary.txt')"
    )
    content: str = Field(description="Content to write to the file")


class ReadFileArgs(BaseModel):
    """Read a file from the scratchpad"""

    filename: str = Field(
        description="Name of the file to read (e.g., 'research/findings.md', 'notes/todo.txt')"
    )


class UpdateFileArgs(BaseModel):
    """Replace the content of an existing scratchpad file"""

    filename: str = Field(
        description="Name of the file to update (e.g., 'research/progress.md')"
    )
    content: str = Field(description="New content for the file")


class DeleteFileArgs(BaseModel):
    """Delete a file (or directory) from the scratchpad"""

    filename: str = Field(
        description="Name of the file to delete (including path relative to scratchpad)"
    )


class CreateDirectoryArgs(BaseModel):
    """Create a directory in the scratchpad"""

    dirname: str = Field(
        description="Name of the directory to create (e.g., 'research/project_x', 'notes/meetings')"
    )


class GetFileInfoArgs(BaseModel):
    """Get size, timestamps and type of a scratchpad entry"""

    filename: str = Field(
        description="Name of the file to check (including path relative to scratchpad)"
    )


class MoveFileArgs(BaseModel):
    """Move or rename a file within the scratchpad"""

    source: str = Field(description="Current file location (e.g., 'temp_notes.md')")
    destination: str = Field(
        description="New file location (e.g., 'research/completed_notes.md')"
    )


class DeleteDirectoryArgs(BaseModel):
    """Delete a directory and everything in it from the scratchpad"""

    dirname: str = Field(
        description="Name of the directory to delete (relative to scratchpad)"
    )


def _isoformat(timestamp: float) -> str:
    return (
        datetime.fromtimestamp(timestamp, tz=timezone.utc)
        .isoformat()
        .replace("+00:00", "Z")
    )


class Scratchpad:
    """File operations confined to a single root directory.

    Attributes:
        root: Absolute, resolved scratchpad directory
    """

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Scratchpad ready at {self.root}")

    def _resolve(self, relative: str) -> Path:
        """Map a scratchpad-relative path to an absolute one inside the root.

        Raises:
            PermissionError: If the path escapes the scratchpad
        """
        path = (self.root / relative).resolve()
        if not path.is_relative_to(self.root):
            raise PermissionError(f"'{relative}' is outside of the scratchpad directory")
        return path

    def _relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def list_files(self, args: ListFilesArgs) -> dict:
        matches = self.root.rglob(args.pattern) if args.recursive else self.root.glob(args.pattern)
        files = sorted(
            self._relative(path)
            for path in matches
            if not any(part.startswith(".") for part in path.relative_to(self.root).parts)
        )
        return {"files": files}

    def create_file(self, args: CreateFileArgs) -> dict:
        path = self._resolve(args.filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(args.content, encoding="utf-8")
        logger.info(f"Created scratchpad file {self._relative(path)}")
        return {"success": True, "path": self._relative(path)}

    def read_file(self, args: ReadFileArgs) -> dict:
        path = self._resolve(args.filename)
        if not path.is_file():
            raise FileNotFoundError(f"File '{args.filename}' does not exist")
        return {"content": path.read_text(encoding="utf-8")}

    def update_file(self, args: UpdateFileArgs) -> dict:
        path = self._resolve(args.filename)
        if not path.is_file():
            raise FileNotFoundError(f"File '{args.filename}' does not exist")
        path.write_text(args.content, encoding="utf-8")
        return {"success": True}

    def delete_file(self, args: DeleteFileArgs) -> dict:
        path = self._resolve(args.filename)
        if path.is_dir():
            return self.delete_directory(DeleteDirectoryArgs(dirname=args.filename))
        if not path.exists():
            raise FileNotFoundError(f"File '{args.filename}' does not exist")
        path.unlink()
        logger.info(f"Deleted scratchpad file {args.filename}")
        return {"success": True}

    def create_directory(self, args: CreateDirectoryArgs) -> dict:
        path = self._resolve(args.dirname)
        path.mkdir(parents=True, exist_ok=True)
        return {"success": True, "path": self._relative(path)}

    def get_file_info(self, args: GetFileInfoArgs) -> dict:
        path = self._resolve(args.filename)
        if not path.exists():
            raise FileNotFoundError(f"'{args.filename}' does not exist")
        stats = path.stat()
        return {
            "size": stats.st_size,
            "created": _isoformat(stats.st_ctime),
            "modified": _isoformat(stats.st_mtime),
            "isDirectory": path.is_dir(),
            "isFile": path.is_file(),
        }

    def move_file(self, args: MoveFileArgs) -> dict:
        source = self._resolve(args.source)
        destination = self._resolve(args.destination)
        if not source.exists():
            raise FileNotFoundError(
                f"Failed to move {args.source} to {args.destination}: source does not exist"
            )
        destination.parent.mkdir(parents=True, exist_ok=True)
        source.rename(destination)
        return {
            "success": True,
            "from": self._relative(source),
            "to": self._relative(destination),
        }

    def delete_directory(self, args: DeleteDirectoryArgs) -> dict:
        path = self._resolve(args.dirname)
        if path == self.root:
            raise PermissionError("Cannot delete the scratchpad root")
        if not path.is_dir():
            raise NotADirectoryError(f"'{args.dirname}' is not a directory")
        shutil.rmtree(path)
        logger.info(f"Deleted scratchpad directory {args.dirname}")
        return {"success": True}


def build_scratchpad_provider(root: Path) -> CapabilityProvider:
    """Create the File Management provider rooted at `root`."""
    scratchpad = Scratchpad(root)
    return CapabilityProvider(
        name="File Management",
        description="Manages notes, research documents, and temporary files in the scratchpad workspace",
        system_prompt=SCRATCHPAD_PROMPT,
        tools=[
            build_tool("listFiles", ListFilesArgs, scratchpad.list_files),
            build_tool("createFile", CreateFileArgs, scratchpad.create_file),
            build_tool("readFile", ReadFileArgs, scratchpad.read_file),
            build_tool("updateFile", UpdateFileArgs, scratchpad.update_file),
            build_tool("deleteFile", DeleteFileArgs, scratchpad.delete_file),
            build_tool("createDirectory", CreateDirectoryArgs, scratchpad.create_directory),
            build_tool("getFileInfo", GetFileInfoArgs, scratchpad.get_file_info),
            build_tool("moveFile", MoveFileArgs, scratchpad.move_file),
            build_tool("deleteDirectory", DeleteDirectoryArgs, scratchpad.delete_directory),
        ],
    )
