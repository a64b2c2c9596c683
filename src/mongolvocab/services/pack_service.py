"""Pack service for the content pack catalog and version upgrades."""
import logging
import time
from typing import List, Optional

from mongolvocab.data.packs import PACKS, get_pack_meta, get_pack_words
from mongolvocab.exceptions import StorageError
from mongolvocab.models.vocab_models import (
    AcceptedPack,
    DismissedPack,
    PackDiff,
    PackState,
    PackStatus,
    UpgradeMode,
    UpgradeResult,
    Word,
    WordFields,
)
from mongolvocab.monitoring import pack_upgrades
from mongolvocab.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def diff_words(old_words: List[Word], new_words: List[Word]) -> PackDiff:
    """Compare two versions of a pack by word id."""
    old = {word.id: word for word in old_words}
    new = {word.id: word for word in new_words}
    return PackDiff(
        removed=sorted(set(old) - set(new)),
        changed=sorted(i for i in set(old) & set(new) if not old[i].same_content(new[i])),
        added=sorted(set(new) - set(old)),
    )


class PackService:
    """Service for accepting, dismissing and upgrading content packs."""

    def __init__(self, storage: StorageBackend):
        """Initialize the service with a storage backend."""
        self.storage = storage

    def get_accepted_packs(self) -> List[AcceptedPack]:
        return self.storage.get_accepted_packs()

    def get_dismissed_packs(self) -> List[DismissedPack]:
        return self.storage.get_dismissed_packs()

    def is_pack_accepted(self, pack_id: str) -> Optional[AcceptedPack]:
        """Get the acceptance record of a pack, if any."""
        for pack in self.get_accepted_packs():
            if pack.pack_id == pack_id:
                return pack
        return None

    def is_pack_dismissed(self, pack_id: str, version: int) -> bool:
        """Check whether a pack was dismissed at exactly this version."""
        return any(
            pack.pack_id == pack_id and pack.version == version
            for pack in self.get_dismissed_packs()
        )

    def accept_pack(self, pack_id: str, version: int) -> None:
        """Add a pack to the user's dictionary at a version."""
        self.storage.save_accepted_pack(pack_id, version)
        logger.info(f"Accepted pack {pack_id} v{version}")

    def dismiss_pack(self, pack_id: str, version: int) -> None:
        """Decline a pack at a version; a later version is offered again.

        Dismissing an update leaves an earlier acceptance in place.
        """
        self.storage.save_dismissed_pack(pack_id, version, time.time())
        logger.info(f"Dismissed pack {pack_id} v{version}")

    def preview_pack(self, pack_id: str, version: Optional[int] = None) -> List[Word]:
        """Get the words of a pack release (the current one by default)."""
        if version is None:
            meta = get_pack_meta(pack_id)
            if meta is None:
                return []
            version = meta.version
        return get_pack_words(pack_id, version)

    def _status(self, meta, accepted: Optional[AcceptedPack]) -> PackStatus:
        if accepted is not None and accepted.version >= meta.version:
            return PackStatus.ACCEPTED
        # A dismissed update keeps the older accepted release in the dictionary.
        if self.is_pack_dismissed(meta.id, meta.version):
            return PackStatus.DISMISSED
        if accepted is not None:
            return PackStatus.UPGRADE_AVAILABLE
        return PackStatus.PENDING

    def get_pack_states(self) -> List[PackState]:
        """Get every catalog pack with the user's decision on it."""
        states = []
        for meta in PACKS:
            accepted = self.is_pack_accepted(meta.id)
            states.append(PackState(
                pack=meta,
                status=self._status(meta, accepted),
                accepted_version=accepted.version if accepted else None,
            ))
        return states

    def get_pending_pack_count(self) -> int:
        """Count packs that still need a decision, upgrades included."""
        return sum(
            1 for state in self.get_pack_states()
            if state.status in (PackStatus.PENDING, PackStatus.UPGRADE_AVAILABLE)
        )

    def diff(self, pack_id: str, old_version: int, new_version: int) -> PackDiff:
        """Compare two releases of a pack."""
        return diff_words(get_pack_words(pack_id, old_version), get_pack_words(pack_id, new_version))

    def upgrade_pack(self, pack_id: str, new_version: int, mode: UpgradeMode) -> UpgradeResult:
        """
        Move an accepted pack to a new version.

        Edited words the new version drops are kept as custom words with
        their confidence. In reset mode the user's edits and deletions of
        the old version are also undone and stale confidence on changed
        words is cleared. The whole upgrade is applied as one unit; if any
        step fails nothing changes and all counts are zero.

        Args:
            pack_id: Pack to upgrade
            new_version: Version to move to
            mode: ``reset`` or ``new_words``

        Returns:
            Number of records changed per kind
        """
        mode = UpgradeMode(mode)
        accepted = self.is_pack_accepted(pack_id)
        if accepted is None or accepted.version == new_version:
            self.accept_pack(pack_id, new_version)
            return UpgradeResult()

        old_ids = [word.id for word in get_pack_words(pack_id, accepted.version)]
        new_ids = {word.id for word in get_pack_words(pack_id, new_version)}
        pack_diff = self.diff(pack_id, accepted.version, new_version)
        result = UpgradeResult()

        with self.storage.atomic() as tx:
            overrides = self.storage.get_word_overrides()
            confidence = self.storage.get_word_confidence()

            for word_id in pack_diff.removed:
                override = overrides.get(word_id)
                if override is None:
                    continue
                promoted = self.storage.add_custom_word(WordFields(
                    english=override.english,
                    mongolian=override.mongolian,
                    pronunciation=override.pronunciation,
                    category=override.category,
                ))
                if promoted is None:
                    raise StorageError(f"Could not keep edited word {word_id}")
                result.added_custom += 1
                level = confidence.get(word_id)
                if level is not None:
                    self.storage.set_word_confidence(promoted.id, level)
                    self.storage.delete_word_confidence(word_id)
                if self.storage.delete_word_override(word_id):
                    result.removed_overrides += 1
                logger.info(f"Kept edited word {word_id} from {pack_id} as custom word {promoted.id}")

            if mode == UpgradeMode.RESET:
                for word_id in old_ids:
                    if self.storage.delete_word_override(word_id):
                        result.removed_overrides += 1
                    if word_id in new_ids and self.storage.remove_deleted_word_id(word_id):
                        result.restored_deletes += 1
                for word_id in pack_diff.changed:
                    if self.storage.delete_word_confidence(word_id):
                        result.reset_confidences += 1

            self.storage.save_accepted_pack(pack_id, new_version)

        if tx.failed:
            logger.error(f"Upgrade of {pack_id} to v{new_version} rolled back: {tx.error}")
            return UpgradeResult()

        pack_upgrades.labels(mode.value).inc()
        logger.info(
            f"Upgraded {pack_id} v{accepted.version} -> v{new_version} ({mode.value}): "
            f"{result.added_custom} kept as custom, {result.removed_overrides} overrides removed, "
            f"{result.restored_deletes} deletions restored, {result.reset_confidences} confidences reset"
        )
        return result
