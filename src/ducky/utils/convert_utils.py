"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""


class ConvertUtils:
    # Binary multiples; the "iB" spellings are accepted as synonyms
    UNITS = {
        'PIB': 1024 ** 5, 'PB': 1024 ** 5, 'P': 1024 ** 5,
        'TIB': 1024 ** 4, 'TB': 1024 ** 4, 'T': 1024 ** 4,
        'GIB': 1024 ** 3, 'GB': 1024 ** 3, 'G': 1024 ** 3,
        'MIB': 1024 ** 2, 'MB': 1024 ** 2, 'M': 1024 ** 2,
        'KIB': 1024, 'KB': 1024, 'K': 1024,
        'B': 1,
    }

    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 512B, 1.50KB, 3.20MB).
        """
        if size_bytes < 0:
            return "0B"
        if size_bytes < 1024:
            return f"{int(size_bytes)}B"

        value = float(size_bytes)
        for unit in ["KB", "MB", "GB", "TB", "PB"]:
            value /= 1024
            if value < 1024:
                return f"{value:.2f}{unit}"
        return f"{value / 1024:.2f}EB"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Supports formats: '1.5GB', '2048KB', '64KiB', '1000', '1K', '1M', '1G', etc.
        Raises ValueError for negative sizes or invalid formats.
        """
        size_str = size_str.strip().upper()
        if not size_str:
            raise ValueError("Empty size string")

        # Longest suffix first so 'KIB' is not read as 'B' after 'KI'
        for unit in sorted(ConvertUtils.UNITS.keys(), key=len, reverse=True):
            if size_str.endswith(unit):
                value_str = size_str[:-len(unit)].strip()
                try:
                    value = float(value_str)
                except ValueError:
                    raise ValueError(f"Invalid numeric value in size: '{value_str}'")

                if value < 0:
                    raise ValueError(f"Negative size not allowed: '{size_str}'")
                return int(value * ConvertUtils.UNITS[unit])

        # No unit specified: treat as bytes
        try:
            value = int(size_str)
        except ValueError:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 1.5GB, 2048KB, 64KiB, 1000, 1K, 1M, etc."
            )

        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")
        return value

    @staticmethod
    def is_valid_size_format(size_str: str) -> bool:
        """
        Check if the input string has a valid size format.
        """
        try:
            ConvertUtils.human_to_bytes(size_str)
            return True
        except ValueError:
            return False
