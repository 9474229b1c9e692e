import os

import pytest
import yaml

from kodus_installer.CONFIG.defaults import DOCKER_NETWORKS
from kodus_installer.exceptions import TemplateError
from kodus_installer.MANAGERS.template_stager import TemplateStager
from kodus_installer.PARSERS.compose_parser import ComposeParser


def test_parse(tmp_path):
    compose_content = {
        'services': {
            'web': {'image': 'nginx:latest'},
            'db': {'image': 'postgres:16'},
        },
        'networks': {
            'shared-network': {'external': True},
            'legacy': {'external': True, 'name': 'legacy-net'},
            'internal': {},
        },
    }

    compose_file = tmp_path / "docker-compose.yml"
    with open(compose_file, 'w') as f:
        yaml.dump(compose_content, f, sort_keys=False)

    manifest = ComposeParser().parse(str(compose_file))

    assert manifest.services == ['web', 'db']
    assert manifest.external_networks == ['shared-network', 'legacy-net']


def test_parse_rejects_invalid_yaml():
    with pytest.raises(TemplateError):
        ComposeParser().parse_from_string("services: [unclosed")


def test_parse_requires_services():
    with pytest.raises(TemplateError):
        ComposeParser().parse_from_string("volumes:\n  data: {}\n")


def test_parse_missing_file(tmp_path):
    with pytest.raises(TemplateError):
        ComposeParser().parse(str(tmp_path / "missing.yml"))


class TestTemplateStager:
    """Tests for the bundled manifest and scripts."""

    def test_bundled_manifest_defines_stack(self):
        manifest = ComposeParser().parse(TemplateStager().compose_template)
        for service in ('orchestrator', 'db_kodus_postgres', 'db_kodus_mongodb', 'rabbitmq', 'grafana'):
            assert service in manifest.services
        assert set(manifest.external_networks) == {
            'shared-network', 'monitoring-network', 'kodus-backend-services'
        }

    def test_stage_copies_verbatim(self, tmp_path):
        stager = TemplateStager()
        stager.stage(str(tmp_path), required_services=['orchestrator'])

        with open(stager.compose_template) as f:
            expected = f.read()
        assert (tmp_path / "docker-compose.yml").read_text() == expected

    def test_stage_requires_services(self, tmp_path):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "docker-compose.yml").write_text("services:\n  web:\n    image: nginx\n")
        target = tmp_path / "target"

        with pytest.raises(TemplateError):
            TemplateStager(templates_dir=str(templates)).stage(str(target), required_services=['orchestrator'])
        assert not (target / "docker-compose.yml").exists()

    def test_setup_script_lookup(self, tmp_path):
        assert os.path.basename(TemplateStager().setup_script()) == "setup-db.sh"
        assert TemplateStager(scripts_dir=str(tmp_path)).setup_script() is None

    def test_stage_requires_external_networks(self, tmp_path):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "docker-compose.yml").write_text(
            "services:\n  orchestrator:\n    image: kodus\n"
            "networks:\n  shared-network:\n    external: true\n  monitoring-network: {}\n"
        )
        target = tmp_path / "target"

        with pytest.raises(TemplateError) as exc_info:
            TemplateStager(templates_dir=str(templates)).stage(
                str(target), required_networks=['shared-network', 'monitoring-network']
            )
        assert 'monitoring-network' in exc_info.value.message
        assert not (target / "docker-compose.yml").exists()

    def test_bundled_manifest_declares_installer_networks(self, tmp_path):
        manifest = TemplateStager().stage(str(tmp_path), required_networks=DOCKER_NETWORKS)
        assert set(DOCKER_NETWORKS) <= set(manifest.external_networks)
