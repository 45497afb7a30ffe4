from __future__ import annotations

from pathlib import Path

from miniship.core.config import Config
from miniship.core.result import Err, Ok, Result
from miniship.output.console import ConsoleProtocol, Style
from miniship.services.release.collaborators import (
    BundleGenerator,
    MetadataStore,
    OtaReleaseClient,
)
from miniship.services.release.errors import ReleaseError
from miniship.services.release.model import (
    CODEPUSH_PLUGIN_NAME,
    CodePushOptions,
    CodePushRelease,
    NativeAppDescriptor,
    ReleaseSet,
)
from miniship.services.release.prompts import Prompter
from miniship.services.release.reconcile import reconcile


def load_store_config(
    *, store: MetadataStore, descriptor: NativeAppDescriptor
) -> Result[Config, ReleaseError]:
    raw = store.get_config(descriptor)
    if isinstance(raw, Err):
        return raw
    if raw.value is None:
        return Ok(Config())
    try:
        return Ok(Config.from_dict(raw.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"invalid configuration for {descriptor}: {e}",
            )
        )


def select_reference(
    *, store: MetadataStore, descriptor: NativeAppDescriptor
) -> Result[ReleaseSet, ReleaseError]:
    """Baseline for the next OTA bundle.

    The latest OTA release when there is one, otherwise the MiniApps shipped
    in the container of this native app version.
    """
    previous = store.get_previously_released_packages(descriptor)
    if isinstance(previous, Err):
        return previous
    if previous.value:
        return previous
    return store.get_container_miniapps(descriptor)


def resolve_codepush_release(
    *,
    store: MetadataStore,
    descriptor: NativeAppDescriptor,
    options: CodePushOptions,
    prompter: Prompter,
) -> Result[CodePushRelease, ReleaseError]:
    deployment = options.deployment_name
    app_name = options.app_name
    platform_name = options.platform_name

    if deployment is None or app_name is None:
        cfg = load_store_config(store=store, descriptor=descriptor)
        if isinstance(cfg, Err):
            return cfg
        codepush = cfg.value.codepush
        if deployment is None:
            deployment = prompter.ask(
                "Deployment name", choices=codepush.deployments or None
            )
        if app_name is None:
            app_name = prompter.ask("Application name", default=codepush.app_name)

    if platform_name is None:
        platform_name = prompter.ask("Platform name", default=descriptor.platform)

    return Ok(
        CodePushRelease(
            app_name=app_name,
            deployment_name=deployment,
            platform_name=platform_name,
            mandatory=options.mandatory,
            rollout_percentage=options.rollout_percentage,
        )
    )


def perform_ota_update(
    *,
    descriptor: NativeAppDescriptor,
    miniapps: ReleaseSet,
    store: MetadataStore,
    bundler: BundleGenerator,
    client: OtaReleaseClient,
    prompter: Prompter,
    console: ConsoleProtocol,
    working_dir: Path,
    options: CodePushOptions = CodePushOptions(),
) -> Result[ReleaseSet, ReleaseError]:
    """Release ``miniapps`` over the air and record the bundle contents.

    The bundle also carries every MiniApp of the previous release that is not
    being updated, at its previous version. Returns the released set.
    """
    target_version = options.target_binary_version or descriptor.version
    if not descriptor.is_complete or target_version is None:
        return Err(
            ReleaseError(
                kind="invalid_descriptor",
                message=f"OTA release needs a complete descriptor, got {descriptor}",
                hint="Expected: name:platform:version",
            )
        )

    plugins = store.get_native_dependencies(descriptor)
    if isinstance(plugins, Err):
        return plugins
    if not any(p.name == CODEPUSH_PLUGIN_NAME for p in plugins.value):
        return Err(
            ReleaseError(
                kind="codepush_plugin_missing",
                message=f"{CODEPUSH_PLUGIN_NAME} plugin is not in {descriptor}",
                hint="Add it to the container before releasing over the air.",
            )
        )

    reference = select_reference(store=store, descriptor=descriptor)
    if isinstance(reference, Err):
        return reference

    to_release = reconcile(miniapps, reference.value)
    console.header(f"OTA bundle for {descriptor}")
    for ref in to_release:
        console.print(f"  {ref}", Style.DIM)

    console.info(f"Generating composite bundle in {working_dir}")
    generated = bundler.generate(to_release, working_dir)
    if isinstance(generated, Err):
        return generated

    release = resolve_codepush_release(
        store=store, descriptor=descriptor, options=options, prompter=prompter
    )
    if isinstance(release, Err):
        return release

    console.info(
        f"Releasing to {release.value.app_name}/{release.value.deployment_name} "
        f"(target {target_version})"
    )
    released = client.release(working_dir, target_version, release.value)
    if isinstance(released, Err):
        return released

    recorded = store.record_release(descriptor, to_release)
    if isinstance(recorded, Err):
        return recorded

    console.success(f"OTA release of {len(to_release)} MiniApp(s) for {descriptor}")
    return Ok(to_release)
