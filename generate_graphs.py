import matplotlib.pyplot as plt
from config import SimulationConfig
from simulator import VirtualMemorySimulator

algorithms = ['random', 'wsclock']
frame_counts = [8, 16, 32, 64]
SEED = 1550


def collect_results():
    results = {}
    for algorithm in algorithms:
        results[algorithm] = {}
        for num_frames in frame_counts:
            config = SimulationConfig(num_frames=num_frames, policy=algorithm, seed=SEED)
            stats = VirtualMemorySimulator(config).run()
            results[algorithm][num_frames] = {
                'page_faults': stats.page_faults,
                'fault_rate': stats.fault_rate,
                'write_backs': stats.write_backs
            }
    return results


def main():
    print("Running simulations...")
    results = collect_results()

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    fig.suptitle('Page Replacement Algorithm Comparison', fontsize=14, fontweight='bold')

    metrics = ['page_faults', 'fault_rate', 'write_backs']
    titles = ['Page Faults', 'Fault Rate', 'Simulated Write-backs']

    legend_handles = None

    for idx, (metric, title) in enumerate(zip(metrics, titles)):
        ax = axes[idx]
        x = range(len(frame_counts))
        width = 0.35
        handles = []
        for offset, algorithm in zip((-width/2, width/2), algorithms):
            values = [results[algorithm][n][metric] for n in frame_counts]
            bars = ax.bar([i + offset for i in x], values, width, label=algorithm)
            handles.append(bars[0])
            for bar in bars:
                height = bar.get_height()
                label = f'{height:.2f}' if metric == 'fault_rate' else f'{int(height)}'
                ax.text(bar.get_x() + bar.get_width()/2., height,
                        label, ha='center', va='bottom', fontsize=9)

        if idx == 0:
            legend_handles = handles

        ax.set_title(title)
        ax.set_xlabel('Physical frames')
        ax.set_xticks(x)
        ax.set_xticklabels(frame_counts)
        ax.grid(axis='y', alpha=0.3)

    fig.legend(legend_handles, algorithms, loc='lower center', ncol=2, frameon=True)

    plt.tight_layout()
    plt.subplots_adjust(bottom=0.15)
    plt.savefig('algorithm_comparison.png', dpi=300, bbox_inches='tight')
    print("\nGraph saved as 'algorithm_comparison.png'")
    plt.show()


if __name__ == '__main__':
    main()
