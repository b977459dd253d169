"""
PromQL query definitions for cluster capacity reporting.

Each template carries a single ``%s`` placeholder for the cluster name.
Aggregation and unit scaling live in the query text itself.
"""
from typing import Dict


# CPU capacity in millicores
QUERY_CPU = 'sum(kube_node_status_capacity{cluster="%s", resource="cpu"}) * 1000'
# Memory capacity in MiB
QUERY_MEMORY = 'sum(kube_node_status_capacity{cluster="%s", resource="memory"})/1024/1024'
# Size of the /var filesystems in GiB
QUERY_EPHEMERAL_STORAGE = (
    'sum(node_filesystem_size_bytes{fstype=~"ext[234]|btrfs|xfs|zfs",cluster="%s", '
    'job="node-exporter", mountpoint="/var"} )/1024/1024/1024'
)
# Ceph cluster capacity in GiB
QUERY_STORAGE = 'ceph_cluster_total_bytes{cluster="%s"}/1024/1024/1024'

# === REPORT ORDER ===
CAPACITY_QUERIES: Dict[str, str] = {
    "CPU": QUERY_CPU,
    "memory": QUERY_MEMORY,
    "ephemeral storage": QUERY_EPHEMERAL_STORAGE,
    "storage": QUERY_STORAGE,
}


def get_all_queries() -> Dict[str, str]:
    """Get all capacity queries in report order."""
    return dict(CAPACITY_QUERIES)


def get_query(label: str) -> str:
    """Get the query template for a metric label."""
    if label not in CAPACITY_QUERIES:
        raise KeyError(f"PromQL query not found for metric: {label}")
    return CAPACITY_QUERIES[label]


def render_query(template: str, cluster: str) -> str:
    """Substitute the cluster name into a query template."""
    return template % cluster
