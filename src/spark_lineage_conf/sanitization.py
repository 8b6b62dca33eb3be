from typing import List, Optional

from .sources import DEFAULT_PREFIX

DATE_PARTITION_PATTERN = r"(.*)(?<remove>/(dt|date)=.*)"
HIVE_PARTITION_PATTERN = r"(.*)(?<remove>/[a-zA-Z0-9_]+=.*)"
SPARK_TEMPORARY_DIR_PATTERN = r"(.*)(?<remove>/_temporary.*)"


def _check_csv_entry(pattern: str) -> str:
    # include/exclude are written as one comma separated property.
    if "," in pattern:
        raise ValueError(f"Dataset filter pattern cannot contain ',': {pattern}")
    return pattern


class SanitizationConfig:
    """
    Writes the `dataset.*` keys that `dataset.build_dataset` reads back:
    `removePath.pattern`, `include` and `exclude`.
    """
    def __init__(self, prefix: str = DEFAULT_PREFIX):
        self._prefix = prefix
        self._remove_path_pattern: Optional[str] = None
        self._excluded: List[str] = []
        self._included: List[str] = []

    def set_remove_path_pattern(self, pattern: str) -> 'SanitizationConfig':
        """
        The listener evaluates this as a Java regex and strips whatever the
        `remove` group matches from dataset names.
        """
        if "(?<remove>" not in pattern:
            raise ValueError(f"Pattern needs a named group 'remove': {pattern}")
        self._remove_path_pattern = pattern
        return self

    def add_exclude_pattern(self, pattern: str) -> 'SanitizationConfig':
        self._excluded.append(_check_csv_entry(pattern))
        return self

    def add_include_pattern(self, pattern: str) -> 'SanitizationConfig':
        """
        Once any include pattern is set, datasets matching none of them are dropped.
        """
        self._included.append(_check_csv_entry(pattern))
        return self

    def use_common_date_partition_pattern(self) -> 'SanitizationConfig':
        return self.set_remove_path_pattern(DATE_PARTITION_PATTERN)

    def use_common_hive_partition_pattern(self) -> 'SanitizationConfig':
        return self.set_remove_path_pattern(HIVE_PARTITION_PATTERN)

    def use_spark_temporary_dir_pattern(self) -> 'SanitizationConfig':
        return self.set_remove_path_pattern(SPARK_TEMPORARY_DIR_PATTERN)

    def get_spark_properties(self) -> dict:
        dataset = f"{self._prefix}dataset."
        props = {}
        if self._remove_path_pattern:
            props[dataset + "removePath.pattern"] = self._remove_path_pattern
        if self._excluded:
            props[dataset + "exclude"] = ",".join(self._excluded)
        if self._included:
            props[dataset + "include"] = ",".join(self._included)
        return props
