"""
apps.platform_interface.serializers
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
I/O-only serializers for the platform metadata API.
No business logic; shape only.
"""
from rest_framework import serializers


class ApplicationSerializer(serializers.Serializer):
    """The ``application`` block of the metadata response."""

    name = serializers.CharField()
    version = serializers.IntegerField()
    workspace_name = serializers.CharField()
    workspace_stub = serializers.CharField()


class PlatformMetadataSerializer(serializers.Serializer):
    """
    Response shape for GET /platform/metadata/.

    Service credentials are never serialized; only service names are listed.
    """

    is_on_platform = serializers.BooleanField()
    port = serializers.IntegerField()
    application = ApplicationSerializer()
    node_tags = serializers.DictField()
    workspace_tags = serializers.DictField()
    services = serializers.ListField(child=serializers.CharField())

    def to_representation(self, instance):
        return super().to_representation({
            "is_on_platform": instance.is_on_platform,
            "port": instance.port,
            "application": instance.application,
            "node_tags": instance.node_tags,
            "workspace_tags": instance.workspace_tags,
            "services": sorted(instance.services),
        })
