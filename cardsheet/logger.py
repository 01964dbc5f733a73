"""
Logging utilities for cardsheet.

Sets up console and debug-file logging and writes per-job reports.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .analysis import LayoutStats
from .config import DEFAULT_LOG_FILE, LayoutSettings


def setup_logging(log_file: Optional[Path] = None) -> None:
    """Setup logging to both file and console."""
    log_path = Path(log_file) if log_file is not None else Path(DEFAULT_LOG_FILE)

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Clear existing handlers
    logger.handlers.clear()

    # File handler - detailed logs
    file_handler = logging.FileHandler(log_path, mode='w', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s'
    ))

    # Console handler - important messages only
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    logging.info(f"Logging initialized. Debug log: {log_path}")


def log_validation_results(job_name: str, total_images: int, errors: List[str]) -> None:
    """
    Log image validation results.

    Args:
        job_name: Name of the print job
        total_images: Number of images checked
        errors: Validation error messages
    """
    logger = logging.getLogger(__name__)

    logger.info(f"Image validation for job '{job_name}':")
    logger.info(f"  Images checked: {total_images}")
    logger.info(f"  Validation errors: {len(errors)}")

    if errors:
        logger.warning("Validation errors:")
        for error in errors[:10]:
            logger.warning(f"  - {error}")
        if len(errors) > 10:
            logger.warning(f"  ... and {len(errors) - 10} more errors")


def log_layout_calculation(job_name: str, card_size: Tuple[float, float],
                           stats: LayoutStats, calculation_time: float) -> None:
    """
    Log layout calculation results.

    Args:
        job_name: Name of the print job
        card_size: (width, height) of every card in mm
        stats: LayoutStats of the layout
        calculation_time: Time taken for calculation in seconds
    """
    logger = logging.getLogger(__name__)

    logger.info(f"Layout calculation for job '{job_name}':")
    logger.info(f"  Card size: {card_size[0]:.2f}x{card_size[1]:.2f}mm")
    logger.info(f"  Pages: {stats.total_pages}")
    logger.info(f"  Cards placed: {stats.total_cards}")
    logger.info(f"  Utilization: {stats.utilization_percentage:.2f}%")
    logger.info(f"  Calculation time: {calculation_time:.3f} seconds")


def write_job_report(report_path: Path, job_name: str, timestamp: datetime,
                     settings: LayoutSettings, num_images: int,
                     card_size: Optional[Tuple[float, float]], stats: LayoutStats,
                     alignment_message: Optional[str] = None,
                     duplex_errors: Sequence[str] = (),
                     error: Optional[str] = None) -> None:
    """
    Write a plain-text report of one layout job.

    Args:
        report_path: Path to report file
        job_name: Name of the print job
        timestamp: Job start timestamp
        settings: Layout settings used
        num_images: Number of input images
        card_size: (width, height) of every card in mm, None if no layout
        stats: LayoutStats of the layout
        alignment_message: Summary from calculate_alignment_info
        duplex_errors: Front/back alignment errors
        error: Error message if the job failed
    """
    page_dims = settings.page_dimensions()
    card_text = f"{card_size[0]:.2f} x {card_size[1]:.2f} mm" if card_size else "n/a"
    status = 'ERROR' if error else 'OK'

    report = f"""cardsheet - Job Report
{'=' * 50}

Job Information:
    Job Name: {job_name}
    Timestamp: {timestamp.strftime('%Y-%m-%d %H:%M:%S')}
    Status: {status}

Page Settings:
    Page Size: {settings.page_size.value} ({page_dims.width} x {page_dims.height} mm)
    Margin: {settings.margin} mm
    Spacing: {settings.spacing} mm

Layout:
    Input Images: {num_images}
    Card Size: {card_text}
    Pages: {stats.total_pages}
    Cards Placed: {stats.total_cards}
    Utilization: {stats.utilization_percentage:.2f}%
    Alignment: {alignment_message or 'n/a'}

"""

    if duplex_errors:
        report += "Front/Back Check:\n"
        for duplex_error in duplex_errors:
            report += f"    - {duplex_error}\n"
        report += "\n"

    if error:
        report += f"""Error Information:
    Error: {error}

"""

    report += f"Completion Time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n"

    logger = logging.getLogger(__name__)
    try:
        with open(report_path, 'w', encoding='utf-8') as f:
            f.write(report)
        logger.info(f"Job report written: {report_path}")
    except OSError as e:
        logger.error(f"Failed to write job report {report_path}: {e}")
