"""
Selection and copying of workspace files by Ant-style patterns.

Pattern syntax:
 - `*` matches zero or more characters within a single path segment
 - `?` matches exactly one character within a single path segment
 - `**` matches zero or more whole path segments
 - a pattern ending with `/` is treated as if `**` followed it (`build/` is the same as `build/**`)

A pattern list is a comma and/or whitespace separated string of patterns. A file is selected when its path relative
to the scanned root matches at least one include pattern and no exclude pattern.
"""

import logging
import os
import re
import shutil
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from runtools.archiver.util import split_patterns

log = logging.getLogger(__name__)

DEFAULT_EXCLUDES = (
    '**/*~',
    '**/#*#',
    '**/.#*',
    '**/%*%',
    '**/._*',
    '**/CVS/**',
    '**/.cvsignore',
    '**/SCCS/**',
    '**/vssver.scc',
    '**/.svn/**',
    '**/.DS_Store',
    '**/.git/**',
    '**/.gitattributes',
    '**/.gitignore',
    '**/.gitmodules',
    '**/.hg/**',
    '**/.hgignore',
    '**/.hgsub',
    '**/.hgsubstate',
    '**/.hgtags',
    '**/.bzr/**',
    '**/.bzrignore',
)


def _compile_segment(segment: str) -> Optional[re.Pattern]:
    if segment == '**':
        return None

    regex = []
    for char in segment:
        if char == '*':
            regex.append('[^/]*')
        elif char == '?':
            regex.append('[^/]')
        else:
            regex.append(re.escape(char))
    return re.compile(''.join(regex))


class AntPattern:
    """
    A single compiled Ant-style path pattern matched against `/` separated relative paths.
    Paths are passed in as tuples of their segments.
    """

    def __init__(self, pattern: str):
        normalized = pattern.replace('\\', '/')
        if normalized.endswith('/'):
            normalized += '**'
        self.pattern = normalized

        segments = []
        for segment in normalized.split('/'):
            if segment == '**' and segments and segments[-1] == '**':
                continue  # `**/**` is the same as `**`
            segments.append(segment)
        self._segments: Tuple[Optional[re.Pattern], ...] = tuple(_compile_segment(s) for s in segments)

    @property
    def matches_subtree(self) -> bool:
        """True when the pattern ends with `**` and therefore matches everything under a matched directory."""
        return self._segments[-1] is None

    def matches(self, parts: Tuple[str, ...]) -> bool:
        return self._match(parts, 0, 0)

    def _match(self, parts, seg_idx, part_idx) -> bool:
        segments = self._segments
        while seg_idx < len(segments):
            segment = segments[seg_idx]
            if segment is None:
                if seg_idx == len(segments) - 1:
                    return True
                return any(self._match(parts, seg_idx + 1, i) for i in range(part_idx, len(parts) + 1))
            if part_idx >= len(parts) or not segment.fullmatch(parts[part_idx]):
                return False
            seg_idx += 1
            part_idx += 1

        return part_idx == len(parts)

    def matches_start(self, dir_parts: Tuple[str, ...]) -> bool:
        """
        Checks whether any path under the given directory could match this pattern.
        Used to avoid descending into directories which cannot contain a match.
        """
        segments = self._segments
        for seg_idx, part in enumerate(dir_parts):
            if seg_idx >= len(segments):
                return False
            segment = segments[seg_idx]
            if segment is None:
                return True
            if not segment.fullmatch(part):
                return False

        return len(dir_parts) < len(segments)

    def __repr__(self):
        return f"AntPattern({self.pattern!r})"


def _raise(error: OSError):
    raise error


class FileSet:
    """
    A set of files under a root directory defined by include and exclude pattern lists.

    Args:
        includes: Comma and/or whitespace separated include patterns
        excludes: Comma and/or whitespace separated exclude patterns, or None
        default_excludes: If True, VCS metadata and editor backup files are excluded as well
    """

    def __init__(self, includes: Optional[str], excludes: Optional[str] = None, *, default_excludes: bool = True):
        self.includes: List[AntPattern] = [AntPattern(p) for p in split_patterns(includes)]
        self.excludes: List[AntPattern] = [AntPattern(p) for p in split_patterns(excludes)]
        if default_excludes:
            self.excludes += [AntPattern(p) for p in DEFAULT_EXCLUDES]

    def is_included(self, parts: Tuple[str, ...]) -> bool:
        return any(p.matches(parts) for p in self.includes) and not any(p.matches(parts) for p in self.excludes)

    def _should_descend(self, dir_parts: Tuple[str, ...]) -> bool:
        if any(p.matches_subtree and p.matches(dir_parts) for p in self.excludes):
            return False
        return any(p.matches_start(dir_parts) for p in self.includes)

    def scan(self, root, *, include_dirs: bool = False) -> Iterator[str]:
        """
        Walks the root directory in sorted order and yields `/` separated relative paths of selected entries.

        Args:
            root: The directory to scan
            include_dirs: If True, matching directories are yielded as well as files

        Raises:
            FileNotFoundError: If the root directory does not exist
            OSError: If a directory cannot be listed
        """
        root = Path(root)
        if not root.is_dir():
            raise FileNotFoundError(f"Base directory does not exist: {root}")
        if not self.includes:
            return

        for dir_path, dir_names, file_names in os.walk(root, onerror=_raise):
            rel_dir = Path(dir_path).relative_to(root).parts
            descend = []
            for name in sorted(dir_names):
                parts = rel_dir + (name,)
                if include_dirs and self.is_included(parts):
                    yield '/'.join(parts)
                if self._should_descend(parts):
                    descend.append(name)
            dir_names[:] = descend

            for name in sorted(file_names):
                parts = rel_dir + (name,)
                if self.is_included(parts):
                    yield '/'.join(parts)


def scan(root, includes, excludes=None, *, default_excludes=True, include_dirs=False) -> Iterator[str]:
    return FileSet(includes, excludes, default_excludes=default_excludes).scan(root, include_dirs=include_dirs)


def copy_recursive(source_root, includes, excludes, dest_root, *, default_excludes=True) -> int:
    """
    Copies files selected by the patterns from the source root to the destination root, preserving their relative
    paths, content and modification times. Files copied before a failure are left in place.

    Args:
        source_root: Directory to copy the files from
        includes: Comma and/or whitespace separated include patterns
        excludes: Comma and/or whitespace separated exclude patterns, or None
        dest_root: Directory to copy the files to, created when needed
        default_excludes: If True, VCS metadata and editor backup files are never copied

    Returns:
        Number of copied files, zero when nothing matched

    Raises:
        FileNotFoundError: If the source root does not exist
        OSError: If listing or copying fails
    """
    source_root, dest_root = Path(source_root), Path(dest_root)
    # Selection completes before the first copy, the destination may lie inside the source
    selected = list(scan(source_root, includes, excludes, default_excludes=default_excludes))

    for rel_path in selected:
        target = dest_root / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source_root / rel_path, target)
        log.debug("event=[artifact_copied] source=[%s] target=[%s]", source_root / rel_path, target)

    log.debug("event=[copy_completed] source=[%s] target=[%s] files=[%d]", source_root, dest_root, len(selected))
    return len(selected)


def _has_match(root: Path, pattern: str) -> bool:
    return next(scan(root, pattern, default_excludes=False, include_dirs=True), None) is not None


def validate_file_mask(root, mask) -> Optional[str]:
    """
    Checks that every pattern of the mask matches at least one file or directory under the root.

    For the first pattern which matches nothing a diagnostic message is produced, suggesting a similar pattern which
    does match or pointing out the longest part of the pattern which still exists.

    Returns:
        The diagnostic message, or None when all patterns match something

    Raises:
        FileNotFoundError: If the root directory does not exist
    """
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Base directory does not exist: {root}")

    for token in split_patterns(mask):
        token = token.replace('\\', '/')
        if _has_match(root, token):
            continue

        if not token.startswith('**/'):
            suggestion = '**/' + token
            if _has_match(root, suggestion):
                return f"'{token}' doesn't match anything, but '{suggestion}' does. Perhaps that's what you mean?"

        # Look for the longest leading portion of the pattern which still matches something
        previous = None
        prefix = token
        while (idx := prefix.rfind('/')) > 0:
            prefix = prefix[:idx]
            if _has_match(root, prefix):
                if previous is None:
                    return f"'{token}' doesn't match anything, although '{prefix}' exists"
                return f"'{token}' doesn't match anything: '{prefix}' exists but not '{previous}'"
            previous = prefix

        if previous:
            return f"'{token}' doesn't match anything: even '{previous}' doesn't exist"
        return f"'{token}' doesn't match anything"

    return None
