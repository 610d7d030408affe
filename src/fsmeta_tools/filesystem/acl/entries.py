"""POSIX.1e access ACL model.

Linux stores a file's access ACL in the ``system.posix_acl_access`` extended
attribute. The value is a little-endian header holding the format version,
followed by one fixed-size record per entry::

    u32 version            always 2
    u16 tag, u16 perm, u32 id   repeated

The kernel drops the attribute whenever an ACL collapses to plain mode bits,
so a missing attribute means the minimal ACL derived from the file mode.
"""

import stat
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

ACL_XATTR_ACCESS = "system.posix_acl_access"
ACL_XATTR_VERSION = 2

_HEADER = struct.Struct("<I")
_ENTRY = struct.Struct("<HHI")


class AclTag(IntEnum):
    """Entry tags as encoded in the extended attribute."""

    USER_OBJ = 0x01
    USER = 0x02
    GROUP_OBJ = 0x04
    GROUP = 0x08
    MASK = 0x10
    OTHER = 0x20


_QUALIFIED_TAGS = frozenset({AclTag.USER, AclTag.GROUP})


@dataclass(frozen=True)
class AclEntry:
    """A single ACL entry.

    Attributes:
        tag: Which principal the entry applies to
        perm: rwx permission triad (0-7)
        qualifier: uid or gid for USER/GROUP entries, None otherwise
    """

    tag: AclTag
    perm: int
    qualifier: Optional[int] = None

    @property
    def is_extended(self) -> bool:
        """True for named user/group entries, which mode bits cannot express."""
        return self.tag in _QUALIFIED_TAGS


@dataclass(frozen=True)
class AccessControlList:
    """The access-class ACL of one file."""

    entries: tuple[AclEntry, ...]

    @classmethod
    def from_xattr(cls, data: bytes) -> "AccessControlList":
        """Decode the value of the ``system.posix_acl_access`` attribute.

        Raises:
            ValueError: If the buffer is truncated, has the wrong version or
                carries an unknown tag
        """
        if len(data) < _HEADER.size:
            raise ValueError(f"ACL attribute too short ({len(data)} bytes)")

        (version,) = _HEADER.unpack_from(data, 0)
        if version != ACL_XATTR_VERSION:
            raise ValueError(f"Unsupported ACL attribute version {version}")

        body = len(data) - _HEADER.size
        if body % _ENTRY.size:
            raise ValueError(f"ACL attribute has a partial entry ({len(data)} bytes)")

        entries = []
        for offset in range(_HEADER.size, len(data), _ENTRY.size):
            raw_tag, perm, raw_id = _ENTRY.unpack_from(data, offset)
            try:
                tag = AclTag(raw_tag)
            except ValueError:
                raise ValueError(f"Unknown ACL entry tag {raw_tag:#x}") from None
            qualifier = raw_id if tag in _QUALIFIED_TAGS else None
            entries.append(AclEntry(tag=tag, perm=perm & 0o7, qualifier=qualifier))

        return cls(entries=tuple(entries))

    @classmethod
    def from_mode(cls, mode: int) -> "AccessControlList":
        """Build the minimal three-entry ACL that a file mode implies."""
        return cls(
            entries=(
                AclEntry(AclTag.USER_OBJ, (mode >> 6) & 0o7),
                AclEntry(AclTag.GROUP_OBJ, (mode >> 3) & 0o7),
                AclEntry(AclTag.OTHER, mode & 0o7),
            )
        )

    def equiv_mode(self) -> tuple[bool, int]:
        """Compare the ACL with the three permission triads.

        Mirrors ``acl_equiv_mode(3)``: a MASK entry takes the place of the
        group triad, and any named USER or GROUP entry makes the ACL
        non-equivalent.

        Returns:
            ``(equivalent, mode)`` where ``mode`` holds the permission bits
            the ACL corresponds to
        """
        mode = 0
        equivalent = not any(entry.is_extended for entry in self.entries)
        mask: Optional[int] = None

        for entry in self.entries:
            if entry.tag == AclTag.USER_OBJ:
                mode |= entry.perm << 6
            elif entry.tag == AclTag.GROUP_OBJ:
                mode |= entry.perm << 3
            elif entry.tag == AclTag.OTHER:
                mode |= entry.perm
            elif entry.tag == AclTag.MASK:
                mask = entry.perm

        if mask is not None:
            mode = (mode & ~stat.S_IRWXG) | (mask << 3)

        return equivalent, mode
