# client/gen_data.py
import random
from datetime import datetime, timedelta, timezone

ROLES  = ["web","web","database","cache","ci","app","monitoring"]
ENVS   = ["production","production","staging","dev"]
DISTROS= [("Ubuntu","22.04"),("Ubuntu","24.04"),("RedHat","9.3"),("Debian","12"),("CentOS","7.9")]
VCPUS  = [2,4,4,8,8,16,32]
IFACES = ["eth0","ens192","eno1"]

def _ip(): return f"10.{random.randint(0,255)}.{random.randint(0,255)}.{random.randint(1,254)}"
def _iso_ago(days=0, jitter_h=0):
    dt = datetime.now(timezone.utc) - timedelta(days=days, hours=random.randint(0, jitter_h))
    return dt.isoformat().replace("+00:00", "Z")

def gen_host_facts():
    distro, version = random.choice(DISTROS)
    vcpus = random.choice(VCPUS)
    ip = _ip()
    facts = {
        "__awx_facts_modified_timestamp": _iso_ago(days=random.randint(0,30), jitter_h=18),
        "ansible_distribution": distro,
        "ansible_distribution_version": version,
        "ansible_processor_vcpus": vcpus,
        "ansible_memtotal_mb": vcpus * random.choice([1990, 3981, 7962]),
        "ansible_default_ipv4": {
            "address": ip,
            "interface": random.choice(IFACES),
            "gateway": ip.rsplit(".", 1)[0] + ".1",
        },
        "ansible_dns": {"nameservers": random.sample(["10.0.0.2","10.0.0.3","1.1.1.1"], k=2)},
        "role": random.choice(ROLES),
        "environment": random.choice(ENVS),
    }
    if random.random() < 0.05:
        return {}  # host registered but never gathered
    return facts

def gen_snapshot(n: int, prefix: str = "node"):
    return {f"{prefix}-{i:03d}.example.com": gen_host_facts() for i in range(1, n + 1)}
