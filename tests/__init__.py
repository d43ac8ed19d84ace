"""
Tests for the TestRail reporter.

Test modules:
- unit/test_entities: entity mapping and linkage results
- unit/test_result_reporter: run lookup, result recording and run closing
- unit/test_provisioning: milestones, plans, suites and sections
- unit/test_config: environment, YAML and mapping configuration
- unit/test_logger: structured logging
- integration/test_testrail_integration: HTTP client and API with requests mocked
- integration/test_pytest_plugin: pytest hook bridging
- integration/test_pytest_plugin_run: full pytest sessions through pytester
"""
