import glob
import json
import os
import sys

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from scipy import stats

from fibbench.errors import AnalysisError

# ======================
# 1. SETUP & CONFIGURATION
# ======================

RESULTS_DIR = 'results'
OUTPUT_DIR = 'analysis_results'
CONFIDENCE = 0.95

sns.set_theme(style="whitegrid", context="paper", font_scale=1.2)
sns.set_palette("deep")

# ======================
# 2. DATA LOADING
# ======================

def safe_convert(value):
    """Robust conversion that maps missing or malformed numbers to NaN"""
    if value is None:
        return np.nan
    try:
        if isinstance(value, str):
            value = value.replace(',', '').strip()
            if value.lower() in ['nan', 'null', 'none', '']:
                return np.nan
        return float(value)
    except (ValueError, TypeError):
        return np.nan

def load_results(pattern=None):
    """Load runner JSON documents into one row per timed run"""
    pattern = pattern or os.path.join(RESULTS_DIR, '*.json')
    print("\nLoading data...")

    try:
        files = sorted(glob.glob(pattern))
        if not files:
            raise AnalysisError(f"No result files match {pattern}")

        print(f"Found {len(files)} JSON files to process")
        records = []

        for file in files:
            with open(file) as f:
                data = json.load(f)

            if 'tests' not in data:
                print(f"Warning: No 'tests' key in {file}")
                continue

            # run numbers restart in every document
            for position, test in enumerate(data['tests'], start=1):
                run = safe_convert(test.get('run'))
                records.append({
                    'file': os.path.basename(file),
                    'n': safe_convert(test.get('n', data.get('n'))),
                    'run': position if np.isnan(run) else run,
                    'result': test.get('result'),
                    'duration_sec': safe_convert(test.get('durationSec')),
                    'timestamp': pd.to_datetime(test.get('timestamp'), errors='coerce')
                })

        df = pd.DataFrame(records, columns=['file', 'n', 'run', 'result', 'duration_sec', 'timestamp'])
        initial_count = len(df)
        df = df.dropna(subset=['n', 'duration_sec']).reset_index(drop=True)
        print(f"Data cleaning: Kept {len(df)} of {initial_count} records after NaN removal")

        if df.empty:
            raise AnalysisError("No valid test data found in any files")

        df['n'] = df['n'].astype(int)
        df['run'] = df['run'].astype(int)
        return df

    except Exception as e:
        print(f"\nError loading data: {str(e)}")
        raise

# ======================
# 3. STATISTICAL ANALYSIS
# ======================

def confidence_interval(values, confidence=CONFIDENCE):
    values = np.asarray(values, dtype=float)
    mean = float(np.mean(values))
    if len(values) < 2:
        return mean, mean
    sem = stats.sem(values)
    if not np.isfinite(sem) or sem == 0:
        return mean, mean
    low, high = stats.t.interval(confidence, len(values) - 1, loc=mean, scale=sem)
    return float(low), float(high)

def calculate_stats(df):
    """Summary statistics of run durations per Fibonacci index"""
    print("\nCalculating statistics...")

    try:
        stats_df = df.groupby('n').agg(
            runs=('duration_sec', 'count'),
            mean=('duration_sec', 'mean'),
            std=('duration_sec', 'std'),
            median=('duration_sec', 'median'),
            min=('duration_sec', 'min'),
            max=('duration_sec', 'max'),
            p95=('duration_sec', lambda x: np.nanpercentile(x, 95))
        ).reset_index()

        intervals = [confidence_interval(group['duration_sec']) for _, group in df.groupby('n')]
        stats_df['ci_low'] = [low for low, _ in intervals]
        stats_df['ci_high'] = [high for _, high in intervals]
        stats_df['std'] = stats_df['std'].fillna(0.0)

        print(stats_df)
        return stats_df

    except Exception as e:
        print(f"Error calculating statistics: {str(e)}")
        raise

# ======================
# 4. VISUALIZATION
# ======================

def plot_durations(df, output_path=None):
    """Box plot of run durations per n; failures are reported, not raised"""
    output_path = output_path or os.path.join(OUTPUT_DIR, 'durations.pdf')
    print("\nGenerating duration plots...")

    try:
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        fig, ax = plt.subplots(figsize=(8, 6))
        sns.boxplot(data=df, x='n', y='duration_sec', ax=ax, width=0.6)
        sns.stripplot(data=df, x='n', y='duration_sec', ax=ax, color='black', size=4)
        ax.set_title('Recursive Fibonacci Run Time')
        ax.set_xlabel('Fibonacci index (n)')
        ax.set_ylabel('Time (s)')

        plt.tight_layout()
        plt.savefig(output_path)
        plt.close(fig)
        print(f"Saved duration plot to {output_path}")
        return output_path

    except Exception as e:
        print(f"Error plotting durations: {str(e)}")
        plt.close('all')
        return None

# ======================
# 5. MAIN
# ======================

def main():
    df = load_results()
    stats_df = calculate_stats(df)

    os.makedirs(OUTPUT_DIR, exist_ok=True)
    stats_path = os.path.join(OUTPUT_DIR, 'statistics.csv')
    stats_df.to_csv(stats_path, index=False)
    print(f"Saved statistics to {stats_path}")

    plot_durations(df)
    print("\nAnalysis complete!")
    return 0

if __name__ == '__main__':
    sys.exit(main())
