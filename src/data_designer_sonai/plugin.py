from data_designer.plugins.plugin import Plugin, PluginType

sonai_plugin = Plugin(
    config_qualified_name="data_designer_sonai.config.SonaiColumnConfig",
    impl_qualified_name="data_designer_sonai.generator.SonaiColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
