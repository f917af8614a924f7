from abilityscout.export.report import filter_by_confidence


def _php_string(value) -> str:
    return str(value).replace("\\", "\\\\").replace("'", "\\'")


def _comment_text(value) -> str:
    return str(value).replace("*/", "* /")


def get_source_identifier(ability) -> str:
    source = ability.source
    if ability.source_type == "rest_route":
        return source.full_route
    if ability.source_type == "shortcode":
        return f"[{source.tag}]"
    return source.hook_name


def generate_description(ability) -> str:
    source_id = get_source_identifier(ability)
    if ability.ability_type == "tool":
        return f"Performs actions related to {source_id}."
    return f"Retrieves data from {source_id}."


def generate_ability_stub(ability) -> str:
    name = ability.suggested_name
    source_id = _comment_text(get_source_identifier(ability))
    func_name = name.replace("-", "_").replace("/", "_") + "_execute"

    return f"""<?php
/**
 * Auto-generated ability stub by Abilities Scout
 *
 * Source Hook: {source_id}
 * File: {_comment_text(ability.source.file)}:{int(ability.source.line)}
 * Confidence: {ability.confidence}
 *
 * TODO: Review and customize this ability before registering
 */

wp_register_ability( '{name}', array(
\t'label'       => '{_php_string(ability.label)}',
\t'description' => '{_php_string(generate_description(ability))}',

\t'input_schema' => array(
\t\t'type'       => 'object',
\t\t'properties' => array(
\t\t\t// TODO: Define input parameters based on {source_id}
\t\t),
\t\t'required'   => array(),
\t),

\t'output_schema' => array(
\t\t'type'       => 'object',
\t\t'properties' => array(
\t\t\t// TODO: Define the output structure
\t\t),
\t),

\t'execute_callback'    => '{func_name}',

\t'permission_callback' => function() {{
\t\treturn current_user_can( 'manage_options' );
\t}},
) );

/**
 * Execute callback for {name}
 *
 * @param array $args Input arguments matching input_schema
 * @return array Output matching output_schema
 */
function {func_name}( $args ) {{
\t// TODO: Implement ability logic
\treturn array(
\t\t'success' => true,
\t\t'data'    => array(),
\t);
}}
"""


def generate_multiple_stubs(result, min_confidence: str = "high"):
    stubs = []
    for ability in filter_by_confidence(result.potential_abilities, min_confidence):
        stubs.append({
            "code": generate_ability_stub(ability),
            "ability_name": ability.suggested_name,
            "source_hook": get_source_identifier(ability),
        })
    return stubs
