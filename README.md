# clusterlint

clusterlint looks over the objects of a Kubernetes cluster (pods, services,
secrets, config maps, volumes, cron jobs, webhook configurations and more)
and reports the places where they stray from recommended practice.

Each finding is a `Diagnostic` (in `clusterlint.diagnostic`) with a
`severity` (`Severity.ERROR`, `Severity.WARNING` or `Severity.SUGGESTION`),
the `kind` of object it concerns, the object's metadata (`object`), its owner
references (`owners`) and a human-readable `message`.

## Installation

```
pip install .
```

The package has no runtime dependencies. Install the `test` extra to run the
test suite with pytest.

## Checks

| Check                            | Groups              | Looks for                                              |
|----------------------------------|---------------------|--------------------------------------------------------|
| `admission-controller-webhook`   | basic               | webhooks pointing at missing services or namespaces    |
| `bare-pods`                      | basic, doks         | pods without an owner (static pods are skipped)        |
| `cronjob-concurrency`            | basic               | cron jobs with the `Allow` concurrency policy          |
| `fully-qualified-image`          | basic               | container images without a fully qualified name        |
| `latest-tag`                     | basic               | container images using the `latest` tag                |
| `hostpath-volume`                | basic, doks         | pods mounting host paths                               |
| `default-namespace`              | basic               | user-created objects in the `default` namespace        |
| `pod-state`                      | workload-health     | pods in the `Failed` or `Unknown` phase                |
| `resource-requirements`          | basic, doks         | containers without resource requests or limits         |
| `unused-config-map`              | basic               | config maps no pod or node refers to                   |
| `unused-pv`                      | basic               | persistent volumes without a claim reference           |
| `unused-pvc`                     | basic               | persistent volume claims no pod mounts                 |
| `unused-secret`                  | basic               | secrets nothing refers to (token secrets are ignored)  |
| `docker-pkg-github-com-registry` | containerd, doks    | images hosted on `docker.pkg.github.com`               |

`admission-controller-webhook` and `docker-pkg-github-com-registry` report
errors; the others report warnings, except that
`docker-pkg-github-com-registry` reports a warning for an image name it
cannot parse.

## Usage

Objects are plain mappings in the shape of the Kubernetes API (`metadata`,
`spec`, `status`, camelCase keys), gathered into a `ClusterObjects` from
`clusterlint.core`:

```python
from clusterlint.catalog import load_all
from clusterlint.core import CheckFilter, ClusterObjects

objects = ClusterObjects(
    pods=[
        {
            "metadata": {"name": "web", "namespace": "default"},
            "spec": {"containers": [{"name": "app", "image": "nginx"}]},
        }
    ],
)

load_all()  # registers every built-in check and returns them, ordered by name

selection = CheckFilter(include_groups=["basic"], exclude_checks=["unused-secret"])

for check in selection.filter_checks():
    for diagnostic in check.run(objects):
        print(diagnostic)
```

A diagnostic prints as `[severity] namespace/kind/name: message`.

### Selecting checks

`CheckFilter` takes `include_groups`, `exclude_groups`, `include_checks` and
`exclude_checks`, all empty by default. Groups are applied first, then check
names. Including and excluding groups at the same time is an error, and so is
including and excluding checks at the same time; `CheckFilter` raises
`ValueError` in either case.

The registry in `clusterlint.core` can also be queried directly:

- `list_checks()` – every registered check, ordered by name
- `list_groups()` – the names of all groups
- `get(name)` – one check; raises `CheckNotFoundError` if it is unknown
- `get_group(name)` – the checks in one group, or an empty list
- `get_groups(names)` – the checks in any of the groups, without repeats;
  raises `CheckNotFoundError` for an unknown group

### Writing a check

Subclass `Check`, set `name`, `groups` and `description`, implement
`run(objects)` returning a list of `Diagnostic`, and pass an instance to
`register`. Registering a second check under a name already in use raises
`ValueError`.

### Turning checks off for one object

An object can opt out of checks with an annotation listing their names,
separated by commas:

```yaml
metadata:
  annotations:
    clusterlint.digitalocean.com/disabled-checks: "bare-pods,latest-tag"
```

`is_enabled(name, metadata)` tells whether a check applies to an object with
that metadata. The built-in checks do not consult it themselves; call it when
deciding which diagnostics to keep.

### Image references

`clusterlint.reference` parses container image references:
`parse_normalized_named` fills in the default registry (`docker.io`) and the
`library/` prefix, `parse_any_reference` also accepts bare image ids and
digests, and `tag_name_only` adds the `latest` tag to a reference that has
neither a tag nor a digest. Invalid input raises `InvalidReferenceError`.

## What this package does not do

clusterlint does not talk to a cluster: it has no API client and does not
read kubeconfig files, so the objects must be fetched by other means and
handed over in a `ClusterObjects`. It also has no command-line program;
checks are run from Python as shown above.