#experiments.py
import os
import sys
import time

import matplotlib
matplotlib.use("Agg")

from huffcodec.experiments import HuffmanExperiment


if __name__ == '__main__':
    experiments_output_path = 'experiments_out'
    input_folder = sys.argv[1] if len(sys.argv) > 1 else 'experiments_data'

    if not os.path.isdir(input_folder):
        raise SystemExit(f"No folder {input_folder} to run experiments on.")

    for file_name in sorted(os.listdir(input_folder)):
        input_path = os.path.join(input_folder, file_name)
        if not os.path.isfile(input_path) or os.path.getsize(input_path) == 0:
            continue

        experiment_name = f"experiment_{file_name}_{time.strftime('%Y%m%d_%H%M%S')}"
        experiment = HuffmanExperiment(experiment_name, input_path, experiments_output_path)
        experiment.run()
        experiment.save_report_in_text(os.path.join(experiments_output_path, experiment_name, f"{experiment_name}.txt"))
        experiment.display_graphs()
        print(f"{file_name}: ratio {experiment.compression_ratio:.3f}, round trip {'ok' if experiment.round_trip_ok else 'FAILED'}")
