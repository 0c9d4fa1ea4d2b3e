"""
Localized user-facing messages.

A Messages object is created once per run and handed to whatever needs to
produce text (the Processor for record messages, the CLI for its output).
"""

import os
from typing import Dict, Optional

DEFAULT_LANGUAGE = "en"

CATALOGS: Dict[str, Dict[str, str]] = {
    "en": {
        "message.success": "Organized",
        "message.duplicate_skipped": "Duplicate, skipped",
        "error.extract_date": "Failed to extract date: {error}",
        "error.check_duplicate": "Failed to check duplicate: {error}",
        "error.copy_file": "Failed to copy file: {error}",

        "status.success": "OK  ",
        "status.skipped": "SKIP",
        "status.failed": "FAIL",

        "run.start": "Starting media organization",
        "run.source_dir": "Source directory:    {path}",
        "run.target_dir": "Target directory:    {path}",
        "run.detection": "Duplicate detection: {value}",
        "run.strategy": "Duplicate strategy:  {value}",
        "run.scanning": "Scanning source directory ...",
        "run.scan_failed": "Scan failed: {error}",
        "run.no_media_files": "No photo or video files found.",
        "run.files_found": "Found {count:,} media files",
        "run.interrupted": "Interrupt received, stopping after the current file ...",
        "run.cancelled": "Run cancelled; statistics cover the files processed so far.",
        "run.log_saved": "Log file: {path}",

        "summary.title": "Media Organizer Summary",
        "summary.total": "Total     : {count:>6,} files",
        "summary.photos": "Photos    : {count:>6,}",
        "summary.videos": "Videos    : {count:>6,}",
        "summary.success": "Organized : {count:>6,}",
        "summary.skipped": "Skipped   : {count:>6,}",
        "summary.failed": "Failed    : {count:>6,}",
        "summary.duration": "Duration  : {duration}",
        "summary.speed": "Speed     : {speed:.2f} files/s",
        "summary.failed_notice": "Some files failed; see the log file for details.",
        "summary.strategy": "Duplicate strategy used: {value}",

        "log.title": "Media organizer log - {timestamp}",
        "log.summary_title": "Run summary",
        "log.start_time": "Start time : {value}",
        "log.end_time": "End time   : {value}",

        "config.error": "Configuration error: {error}",
    },
    "zh": {
        "message.success": "整理成功",
        "message.duplicate_skipped": "重复文件，已跳过",
        "error.extract_date": "提取日期失败: {error}",
        "error.check_duplicate": "检查重复失败: {error}",
        "error.copy_file": "复制文件失败: {error}",

        "status.success": "成功",
        "status.skipped": "跳过",
        "status.failed": "失败",

        "run.start": "开始整理照片和视频",
        "run.source_dir": "源目录:       {path}",
        "run.target_dir": "目标目录:     {path}",
        "run.detection": "重复识别方式: {value}",
        "run.strategy": "重复处理策略: {value}",
        "run.scanning": "正在扫描源目录 ...",
        "run.scan_failed": "扫描失败: {error}",
        "run.no_media_files": "没有找到照片或视频文件。",
        "run.files_found": "找到 {count:,} 个媒体文件",
        "run.interrupted": "收到中断信号，当前文件处理完后停止 ...",
        "run.cancelled": "已取消；统计信息只包含已处理的文件。",
        "run.log_saved": "日志文件: {path}",

        "summary.title": "整理完成汇总",
        "summary.total": "总文件数 : {count:>6,}",
        "summary.photos": "照片     : {count:>6,}",
        "summary.videos": "视频     : {count:>6,}",
        "summary.success": "成功整理 : {count:>6,}",
        "summary.skipped": "跳过     : {count:>6,}",
        "summary.failed": "失败     : {count:>6,}",
        "summary.duration": "耗时     : {duration}",
        "summary.speed": "处理速度 : {speed:.2f} 文件/秒",
        "summary.failed_notice": "部分文件处理失败，详情请查看日志文件。",
        "summary.strategy": "使用的重复处理策略: {value}",

        "log.title": "照片视频整理日志 - {timestamp}",
        "log.summary_title": "整理完成汇总",
        "log.start_time": "开始时间 : {value}",
        "log.end_time": "结束时间 : {value}",

        "config.error": "配置错误: {error}",
    },
}


def parse_language_code(code: Optional[str]) -> str:
    """'zh_CN.UTF-8' -> 'zh', 'en-GB' -> 'en'; anything unsupported -> 'en'."""
    if not code:
        return DEFAULT_LANGUAGE
    main = code.lower().replace("-", "_").split(".")[0].split("_")[0]
    if main.startswith("zh"):
        return "zh"
    return DEFAULT_LANGUAGE


def detect_language() -> str:
    for var in ("LANG", "LC_ALL", "LC_MESSAGES", "LANGUAGE"):
        value = os.environ.get(var)
        if value:
            return parse_language_code(value)
    return DEFAULT_LANGUAGE


class Messages:
    def __init__(self, language: Optional[str] = None) -> None:
        lang = parse_language_code(language) if language else detect_language()
        self.language = lang if lang in CATALOGS else DEFAULT_LANGUAGE
        self._catalog = CATALOGS[self.language]

    def t(self, key: str, **kwargs) -> str:
        template = self._catalog.get(key) or CATALOGS[DEFAULT_LANGUAGE].get(key)
        if template is None:
            return key
        return template.format(**kwargs) if kwargs else template
